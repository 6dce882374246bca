from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Expression(ABC):
    """Immutable query clause node.

    Nodes carry no interpretation of their own; consumers walk them through
    ``accept`` with a visitor of the matching family.
    """

    __slots__ = ()

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Call the visitor method matching this node kind."""
