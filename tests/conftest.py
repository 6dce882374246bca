"""Shared fixtures: an in-memory provider that records the commands it receives."""

from __future__ import annotations

from typing import Any

import pytest

from entity_bridge import EntityCollection, EntityProvider, EntitySet

from .models import Author, Book


class RecordingProvider(EntityProvider):
    """Provider that records each command and answers from canned results."""

    def __init__(self) -> None:
        self.commands: list[Any] = []
        self.entities: list[Any] = []
        self.error: Exception | None = None

    def _record(self, command: Any) -> None:
        self.commands.append(command)
        if self.error is not None:
            raise self.error

    @property
    def last_command(self) -> Any:
        return self.commands[-1]

    async def execute_add_command(self, command):
        self._record(command)
        self.entities.append(command.entity)
        return command.entity

    async def execute_bulk_add_command(self, command):
        self._record(command)
        self.entities.extend(command.entity_collection)
        return command.entity_collection

    async def execute_update_command(self, command):
        self._record(command)
        return command.entity

    async def execute_bulk_update_command(self, command):
        self._record(command)
        return command.entity_collection

    async def execute_batch_update_command(self, command):
        self._record(command)

    async def execute_remove_command(self, command):
        self._record(command)
        self.entities.remove(command.entity)
        return command.entity

    async def execute_bulk_remove_command(self, command):
        self._record(command)
        for entity in command.entity_collection:
            self.entities.remove(entity)
        return command.entity_collection

    async def execute_batch_remove_command(self, command):
        self._record(command)

    async def execute_query_command(self, command):
        self._record(command)
        return self.entities[0] if self.entities else None

    async def execute_bulk_query_command(self, command):
        self._record(command)
        return EntityCollection(list(self.entities))


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def books(provider: RecordingProvider) -> EntitySet[Book]:
    return EntitySet(Book, provider)


@pytest.fixture
def authors(provider: RecordingProvider) -> EntitySet[Author]:
    return EntitySet(Author, provider)
