"""Tests for reference-aware serialization."""

import logging
from datetime import date, datetime, timezone

import pytest

from entity_bridge import MISSING, ConfigurationError, EntityCollection, SerializerOptions, TypeManager
from entity_bridge.serialization import ReferenceTable

from .models import Author, Book, Library, Note, Publisher, Shelf, Tag


class TestEntityCollectionRoundTrip:
    """Tests for serializing collections of flat entities."""

    def test_round_trip(self):
        """Test a list of tags survives a round trip and can be filtered."""
        manager = TypeManager()
        data = [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]

        tags = manager.deserialize(EntityCollection[Tag], data)

        assert isinstance(tags, EntityCollection)
        assert [(tag.id, tag.name) for tag in tags] == [(1, "a"), (2, "b")]
        assert manager.serialize(EntityCollection[Tag], tags) == data
        assert [tag.id for tag in tags.filter(lambda tag: tag.id > 1)] == [2]

    def test_serialize_then_deserialize(self):
        """Test serialized entities come back as distinct objects in order."""
        manager = TypeManager()
        tags = EntityCollection([Tag(id=1, name="a"), Tag(id=2, name="b")])

        restored = manager.deserialize(EntityCollection[Tag], manager.serialize(EntityCollection[Tag], tags))

        assert [(tag.id, tag.name) for tag in restored] == [(1, "a"), (2, "b")]
        assert restored[0] is not restored[1]
        assert restored[0] is not tags[0]
        assert [tag.id for tag in restored.filter(lambda tag: tag.id > 1)] == [2]

    def test_empty_collection(self):
        assert TypeManager().serialize(EntityCollection[Tag], EntityCollection()) == []
        assert TypeManager().deserialize(EntityCollection[Tag], []) == EntityCollection()

    def test_none_passes_through(self):
        manager = TypeManager()

        assert manager.serialize(EntityCollection[Tag], None) is None
        assert manager.deserialize(EntityCollection[Tag], None) is None

    def test_missing_without_default(self):
        manager = TypeManager()

        assert manager.serialize(EntityCollection[Tag], MISSING) is MISSING
        assert manager.deserialize(EntityCollection[Tag], MISSING) is MISSING

    def test_missing_with_default(self):
        """Test use_default_value substitutes an empty collection."""
        manager = TypeManager(SerializerOptions(use_default_value=True))

        assert manager.serialize(EntityCollection[Tag], MISSING) == []
        restored = manager.deserialize(EntityCollection[Tag], MISSING)
        assert isinstance(restored, EntityCollection)
        assert restored.is_empty()

    def test_none_element(self):
        manager = TypeManager()

        tags = manager.deserialize(EntityCollection[Tag], [None, {"id": 1, "name": "a"}])

        assert tags[0] is None
        assert tags[1].id == 1

    def test_explicit_generic(self):
        """Test collections typed through Field(generic=...) serialize their elements."""
        library = Library(id=1, shelves=EntityCollection([Shelf(id=7)]))

        data = TypeManager().serialize(Library, library)

        assert data == {"id": 1, "shelves": [{"id": 7, "books": None}]}


class TestEntitySerialization:
    """Tests for entities with nested properties."""

    def test_alias(self):
        """Test aliased properties use their serialized name."""
        book = Book(id=1, title="Dune", year=1965)

        data = TypeManager().serialize(Book, book)

        assert data == {"id": 1, "title": "Dune", "published_year": 1965, "author": None}
        assert TypeManager().deserialize(Book, data).year == 1965

    def test_nested_entity(self):
        author = Author(id=1, name="Herbert", publisher=Publisher(id=9, name="Chilton"))

        data = TypeManager().serialize(Author, author)

        assert data == {
            "id": 1,
            "name": "Herbert",
            "publisher": {"id": 9, "name": "Chilton"},
            "books": [],
        }
        restored = TypeManager().deserialize(Author, data)
        assert restored.publisher.name == "Chilton"

    def test_absent_property_keeps_default(self):
        restored = TypeManager().deserialize(Author, {"id": 1, "name": "a"})

        assert restored.publisher is None
        assert isinstance(restored.books, EntityCollection)


class TestReferences:
    """Tests for shared and cyclic references."""

    def test_shared_entity_serializes_once(self):
        """Test an entity reachable twice yields one shared dict."""
        author = Author(id=1, name="a")
        books = EntityCollection([Book(id=1, title="x", author=author), Book(id=2, title="y", author=author)])

        data = TypeManager().serialize(EntityCollection[Book], books)

        assert data[0]["author"] is data[1]["author"]

    def test_shared_dict_deserializes_once(self):
        """Test a dict reachable twice yields one shared entity."""
        author = {"id": 1, "name": "a"}
        data = [{"id": 1, "title": "x", "author": author}, {"id": 2, "title": "y", "author": author}]

        books = TypeManager().deserialize(EntityCollection[Book], data)

        assert books[0].author is books[1].author

    def test_shared_dict_at_two_positions(self):
        """Test one dict listed twice yields one entity at both positions."""
        tag = {"id": 1, "name": "a"}

        tags = TypeManager().deserialize(EntityCollection[Tag], [tag, tag])

        assert tags[0] is tags[1]
        assert tags.length == 2

    def test_cycle_serialization(self):
        """Test a cyclic graph is serialized with the cycle preserved."""
        author = Author(id=1, name="a")
        book = Book(id=1, title="x", author=author)
        author.books.push(book)

        data = TypeManager().serialize(Author, author)

        assert data["books"][0]["author"] is data

    def test_cycle_deserialization(self):
        """Test a cyclic data graph is restored with the cycle preserved."""
        data = {"id": 1, "name": "a", "books": []}
        data["books"].append({"id": 1, "title": "x", "author": data})

        author = TypeManager().deserialize(Author, data)

        assert author.books[0].author is author

    def test_collection_cycle(self):
        """Test a collection containing an entity that refers back to it."""
        author = Author(id=1, name="a")
        book = Book(id=1, title="x", author=author)
        author.books.push(book)

        data = TypeManager().serialize(EntityCollection[Book], EntityCollection([book]))

        assert data[0]["author"]["books"][0] is data[0]

    def test_reference_table_is_per_call(self):
        manager = TypeManager()
        tag = Tag(id=1, name="a")

        first = manager.serialize(Tag, tag)
        second = manager.serialize(Tag, tag)

        assert first == second
        assert first is not second

    def test_callback_after_resolution_runs_immediately(self):
        table = ReferenceTable()
        reference = object()
        calls = []

        table.resolve(reference, lambda: "value")
        table.push_callback(reference, lambda: calls.append(1))

        assert calls == [1]


class TestDiagnostics:
    """Tests for mismatches and configuration errors."""

    def test_collection_mismatch_is_logged(self, caplog):
        caplog.set_level(logging.ERROR, logger="entity_bridge.serialization")

        assert TypeManager().serialize(EntityCollection[Tag], "tags") is MISSING
        assert "$: cannot serialize value as entity collection." in caplog.text

        assert TypeManager().deserialize(EntityCollection[Tag], {"id": 1}) is MISSING
        assert "$: cannot deserialize value as entity collection." in caplog.text

    def test_element_mismatch_is_logged(self, caplog):
        caplog.set_level(logging.ERROR, logger="entity_bridge.serialization")

        tags = TypeManager().deserialize(EntityCollection[Tag], [{"id": "one", "name": "a"}])

        assert "$[0].id: cannot deserialize value as int." in caplog.text
        assert tags[0].name == "a"

    def test_bool_is_not_an_int(self, caplog):
        caplog.set_level(logging.ERROR, logger="entity_bridge.serialization")

        tag = TypeManager().deserialize(Tag, {"id": True, "name": "a"})

        assert "$.id: cannot deserialize value as int." in caplog.text
        assert tag.id is None
        assert TypeManager().serialize(Tag, Tag(id=False, name="a")) == {"name": "a"}

    def test_accepted_primitives(self):
        assert TypeManager().serialize(float, 3) == 3
        assert TypeManager().deserialize(bool, True) is True

    def test_logging_can_be_disabled(self, caplog):
        caplog.set_level(logging.ERROR, logger="entity_bridge.serialization")
        manager = TypeManager(SerializerOptions(log_errors=False))

        assert manager.serialize(EntityCollection[Tag], 42) is MISSING
        assert caplog.text == ""

    def test_collection_without_generic(self):
        """Test serializing a collection without element metadata fails."""
        shelf = Shelf(id=1, books=EntityCollection([Book(id=1, title="x")]))

        with pytest.raises(ConfigurationError, match="Cannot define generic metadata 0 of EntityCollection"):
            TypeManager().serialize(Shelf, shelf)

    def test_type_without_serializer(self):
        class Unregistered:
            pass

        with pytest.raises(ConfigurationError, match="No serializer defined for type Unregistered"):
            TypeManager().serialize(Unregistered, Unregistered())


class TestContainerSerialization:
    """Tests for list, tuple and dict properties."""

    def test_typed_containers(self):
        note = Note(id=1, labels=["x", "y"], scores={"a": 1}, position=(3, 4), history=(1, 2, 3))

        data = TypeManager().serialize(Note, note)

        assert data["labels"] == ["x", "y"]
        assert data["scores"] == {"a": 1}
        assert data["position"] == [3, 4]
        assert data["history"] == [1, 2, 3]

        restored = TypeManager().deserialize(Note, data)

        assert restored.labels == ["x", "y"]
        assert restored.scores == {"a": 1}
        assert restored.position == (3, 4)
        assert restored.history == (1, 2, 3)

    def test_list_of_entities(self):
        """Test entities inside a plain list keep shared references."""
        book = {"id": 1, "title": "x"}

        note = TypeManager().deserialize(Note, {"id": 1, "books": [book, book]})

        assert isinstance(note.books, list)
        assert note.books[0] is note.books[1]
        assert note.books[0].title == "x"

    def test_cyclic_entity_in_list(self):
        author = Author(id=1, name="a")
        book = Book(id=1, title="x", author=author)
        author.books.push(book)

        data = TypeManager().serialize(list[Book], [book])

        assert data[0]["author"]["books"][0] is data[0]

    def test_untyped_dict_passes_values_through(self):
        note = Note(id=1, extra={"nested": [1, "two"]})

        data = TypeManager().serialize(Note, note)

        assert data["extra"] == {"nested": [1, "two"]}
        assert TypeManager().deserialize(Note, data).extra == {"nested": [1, "two"]}

    def test_element_mismatch_is_logged(self, caplog):
        caplog.set_level(logging.ERROR, logger="entity_bridge.serialization")

        note = TypeManager().deserialize(Note, {"id": 1, "labels": ["x", 2], "scores": {"a": "b"}})

        assert "$.labels[1]: cannot deserialize value as str." in caplog.text
        assert "$.scores['a']: cannot deserialize value as int." in caplog.text
        assert note.labels == ["x", None]
        assert note.scores == {}

    def test_container_mismatch_is_logged(self, caplog):
        caplog.set_level(logging.ERROR, logger="entity_bridge.serialization")

        assert TypeManager().deserialize(list[str], "x") is MISSING
        assert "$: cannot deserialize value as list." in caplog.text

        assert TypeManager().serialize(dict[str, int], [1]) is MISSING
        assert "$: cannot serialize value as dict." in caplog.text

    def test_missing_with_default(self):
        manager = TypeManager(SerializerOptions(use_default_value=True))

        assert manager.deserialize(list[str], MISSING) == []
        assert manager.deserialize(dict[str, int], MISSING) == {}
        assert manager.serialize(tuple[int, ...], MISSING) == []


class TestTemporalSerialization:
    """Tests for datetime and date properties."""

    def test_round_trip(self):
        written_at = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        note = Note(id=1, written_at=written_at, due=date(2024, 6, 1))

        data = TypeManager().serialize(Note, note)

        assert data["written_at"] == "2024-05-01T12:30:00+00:00"
        assert data["due"] == "2024-06-01"

        restored = TypeManager().deserialize(Note, data)

        assert restored.written_at == written_at
        assert restored.due == date(2024, 6, 1)

    def test_native_values_pass_through(self):
        """Test values a driver already decoded are kept as they are."""
        due = date(2024, 6, 1)

        assert TypeManager().deserialize(date, due) is due

    def test_datetime_is_not_a_date(self, caplog):
        caplog.set_level(logging.ERROR, logger="entity_bridge.serialization")

        assert TypeManager().serialize(date, datetime(2024, 6, 1)) is MISSING
        assert "$: cannot serialize value as date." in caplog.text

    def test_invalid_string_is_logged(self, caplog):
        caplog.set_level(logging.ERROR, logger="entity_bridge.serialization")

        note = TypeManager().deserialize(Note, {"id": 1, "written_at": "yesterday"})

        assert "$.written_at: cannot deserialize value as datetime." in caplog.text
        assert note.written_at is None
