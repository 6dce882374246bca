"""
Reference-aware serialization between typed objects and generic data.

Entities become dicts, entity collections, lists and tuples become lists,
dates become ISO 8601 strings and scalars pass through. Shared and cyclic
references are preserved in both directions.
"""

from datetime import date, datetime

from ..entity_collection import EntityCollection
from ..metadata import define_type
from .collection import DictSerializer, EntityCollectionSerializer, ListSerializer
from .context import (
    MISSING,
    DeferredReference,
    ReferenceTable,
    SerializerContext,
    SerializerLog,
    SerializerOptions,
)
from .serializers import EntitySerializer, PrimitiveSerializer, Serializer, TemporalSerializer
from .type_manager import TypeManager

for _primitive in (str, int, float, bool, object):
    define_type(_primitive, serializer=PrimitiveSerializer())

define_type(EntityCollection, serializer=EntityCollectionSerializer(), default_value=EntityCollection)
define_type(list, serializer=ListSerializer(), default_value=list)
define_type(tuple, serializer=ListSerializer(), default_value=tuple)
define_type(dict, serializer=DictSerializer(), default_value=dict)
# datetime subclasses date, so each needs its own registration.
define_type(datetime, serializer=TemporalSerializer())
define_type(date, serializer=TemporalSerializer())

__all__ = [
    "MISSING",
    "DeferredReference",
    "DictSerializer",
    "EntityCollectionSerializer",
    "EntitySerializer",
    "ListSerializer",
    "PrimitiveSerializer",
    "ReferenceTable",
    "Serializer",
    "SerializerContext",
    "SerializerLog",
    "SerializerOptions",
    "TemporalSerializer",
    "TypeManager",
]
