"""
entity-bridge: typed entity queries decoupled from storage.

Queries are built from property-path lambdas against entity types, turned
into immutable expression trees and handed to an :class:`EntityProvider` as
commands. Serialization maps entities and entity collections to generic data
and back, preserving shared and cyclic references.

Example:
    >>> from entity_bridge import Entity, EntityCollection, EntitySet
    >>>
    >>> class Book(Entity):
    ...     id: int
    ...     title: str
    >>>
    >>> books = EntitySet(Book, provider)
    >>> found = await (
    ...     books.where(lambda b, f: f.starts_with(b.title, "The"))
    ...     .order_by(lambda b: b.title)
    ...     .take(10)
    ...     .find_all()
    ... )
"""

import logging

from .builders import IncludeQueryCommandBuilder, OrderQueryCommandBuilder, QueryCommandBuilder
from .commands import (
    AddCommand,
    BatchRemoveCommand,
    BatchUpdateCommand,
    BrowseCommand,
    BulkAddCommand,
    BulkQueryCommand,
    BulkRemoveCommand,
    BulkUpdateCommand,
    Command,
    QueryCommand,
    RemoveCommand,
    UpdateCommand,
    execute_command,
)
from .entity import Entity
from .entity_collection import EntityCollection
from .entity_set import EntitySet
from .errors import ConfigurationError, EntityBridgeError
from .metadata import Field, PropertyMetadata, TypeMetadata, define_type, get_type_metadata
from .property_info import EntityInfo, PropertyInfo
from .provider import EntityProvider
from .proxy import EntityInfoProxy, PropertyInfoProxy, proxy_target
from .serialization import MISSING, SerializerOptions, TypeManager

__version__ = "0.1.0"

__all__ = [
    # Entities
    "Entity",
    "EntityCollection",
    "Field",
    # Metadata
    "EntityInfo",
    "PropertyInfo",
    "PropertyMetadata",
    "TypeMetadata",
    "define_type",
    "get_type_metadata",
    # Proxies
    "EntityInfoProxy",
    "PropertyInfoProxy",
    "proxy_target",
    # Builders
    "EntitySet",
    "IncludeQueryCommandBuilder",
    "OrderQueryCommandBuilder",
    "QueryCommandBuilder",
    # Commands
    "AddCommand",
    "BatchRemoveCommand",
    "BatchUpdateCommand",
    "BrowseCommand",
    "BulkAddCommand",
    "BulkQueryCommand",
    "BulkRemoveCommand",
    "BulkUpdateCommand",
    "Command",
    "EntityProvider",
    "QueryCommand",
    "RemoveCommand",
    "UpdateCommand",
    "execute_command",
    # Serialization
    "MISSING",
    "SerializerOptions",
    "TypeManager",
    # Errors
    "ConfigurationError",
    "EntityBridgeError",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
