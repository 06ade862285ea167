from .attribute import Attribute
from .record import Record
from .dummy import Dummy, factory
from .schemas import AttributeSpec, RecordSchema, SchemaRegistry, registry
from .wire import load_record, load_records
from .exceptions import (
    RipeDBError,
    AttributeNotFound,
    IncompleteRecord,
    PrimaryKeyUndefined,
    CardinalityError,
    UnknownRecordType,
)

__all__ = [
    "Attribute",
    "Record",
    "Dummy",
    "factory",
    "AttributeSpec",
    "RecordSchema",
    "SchemaRegistry",
    "registry",
    "load_record",
    "load_records",
    "RipeDBError",
    "AttributeNotFound",
    "IncompleteRecord",
    "PrimaryKeyUndefined",
    "CardinalityError",
    "UnknownRecordType",
]
