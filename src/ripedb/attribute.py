from collections.abc import Iterable
from typing import Any
from .exceptions import CardinalityError

SINGLE = False
MULTIPLE = True
OPTIONAL = False
REQUIRED = True


def _to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    # records are referenced by their primary key
    if hasattr(value, "get_primary_key"):
        return value.get_primary_key()
    return str(value)


def _normalize(value: Any) -> list[str]:
    """
    Convert a scalar or an iterable into a list of strings.

    None and "" mean "no value" and are dropped.
    """
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        items: Iterable[Any] = value
    else:
        items = [value]
    return [_to_string(v) for v in items if v is not None and v != ""]


class Attribute:
    """
    A named value slot of a record.

    The flags are fixed on creation; the values can change at any time.
    An attribute without values is undefined.
    """

    def __init__(self, name: str, required: bool, multiple: bool):
        self._name = name
        self._required = bool(required)
        self._multiple = bool(multiple)
        self._values: list[str] = []

    def __repr__(self) -> str:
        return f"Attribute({self._name}, {self.get_value()!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def required(self) -> bool:
        return self._required

    @property
    def multiple(self) -> bool:
        return self._multiple

    def get_name(self) -> str:
        return self._name

    def is_required(self) -> bool:
        return self._required

    def is_multiple(self) -> bool:
        return self._multiple

    def is_defined(self) -> bool:
        return len(self._values) > 0

    def set_value(self, value: Any) -> None:
        """
        Replace the current value(s).

        Passing None, "" or an empty sequence resets the attribute.

        Raises:
            CardinalityError: more than one value for a single-valued attribute.
        """
        values = _normalize(value)
        if not self._multiple and len(values) > 1:
            raise CardinalityError(
                f"Attribute {self._name} does not allow multiple values."
            )
        self._values = values

    def add_value(self, value: Any) -> None:
        """
        Append value(s).

        A single-valued attribute only accepts a value while it is undefined.
        """
        values = _normalize(value)
        if not self._multiple and len(self._values) + len(values) > 1:
            raise CardinalityError(
                f"Attribute {self._name} does not allow multiple values."
            )
        self._values.extend(values)

    def unset(self) -> None:
        self._values = []

    def get_value(self) -> str | list[str] | None:
        if self._multiple:
            return list(self._values)
        if self._values:
            return self._values[0]
        return None

    def to_array(self) -> list[dict[str, str]]:
        return [{"name": self._name, "value": value} for value in self._values]
