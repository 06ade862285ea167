class RipeDBError(Exception):
    """Base class for exceptions in this module."""


class AttributeNotFound(RipeDBError, KeyError):
    """Raised when an attribute is not declared for a record type."""

    def __init__(self, record_type: str, name: str):
        self.record_type = record_type
        self.name = name
        super().__init__(
            f'Attribute "{name}" is not defined for the {record_type.upper()} object.'
        )

    def __str__(self) -> str:
        # KeyError would quote the message
        return self.args[0]


class IncompleteRecord(RipeDBError):
    """Raised when a record is serialized while a required attribute is unset."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Required attribute {name} is not set.")


class PrimaryKeyUndefined(RipeDBError):
    """Raised when the primary key is read before it is set."""


class CardinalityError(RipeDBError, ValueError):
    """Raised when a single-valued attribute receives more than one value."""


class UnknownRecordType(RipeDBError):
    """Raised when no schema is available for a record type."""
