import copy
import json
from typing import Any, Iterator
from .attribute import Attribute, OPTIONAL, SINGLE
from .exceptions import AttributeNotFound, IncompleteRecord, PrimaryKeyUndefined


def camel_case(record_type: str) -> str:
    """
    aut-num -> AutNum
    """
    return "".join(part.capitalize() for part in record_type.split("-"))


class Record:
    """
    A registry object made of named attributes.

    Declared attributes are set by the user and make up the wire payload.
    Generated attributes are filled in by the server, are always optional
    and are never serialized.
    """

    def __init__(self, type: str, primary_key: str | None = None):
        self._type = type
        self._primary_key = primary_key
        self._attributes: dict[str, Attribute] = {}
        self._generated: dict[str, Attribute] = {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._type}, {self._primary_key})"

    def _check_unique(self, name: str) -> None:
        if name in self._attributes or name in self._generated:
            raise ValueError(f"attribute {name} already declared for {self._type}")

    def _create(self, name: str, required: bool, multiple: bool) -> None:
        self._check_unique(name)
        self._attributes[name] = Attribute(name, required, multiple)

    def _create_generated(self, name: str, multiple: bool = SINGLE) -> None:
        self._check_unique(name)
        self._generated[name] = Attribute(name, OPTIONAL, multiple)

    def get_type(self) -> str:
        return self._type

    def get_primary_key_name(self) -> str | None:
        return self._primary_key

    def get_primary_key(self) -> str:
        if self._primary_key is None:
            raise PrimaryKeyUndefined(f"{self._type} has no primary key attribute")
        value = self.get_attribute(self._primary_key).get_value()
        if isinstance(value, list):
            # a multiple key attribute is keyed by its first value
            value = value[0] if value else None
        if not value:
            raise PrimaryKeyUndefined(
                f"primary key {self._primary_key} of {self._type} is not set"
            )
        return value

    def get_attribute(self, name: str) -> Attribute:
        if name in self._attributes:
            return self._attributes[name]
        if name in self._generated:
            return self._generated[name]
        raise AttributeNotFound(self._type, name)

    def set_attribute(self, name: str, value: Any) -> "Record":
        self.get_attribute(name).set_value(value)
        return self

    def add_attribute(self, name: str, value: Any) -> "Record":
        self.get_attribute(name).add_value(value)
        return self

    def get_attributes(self) -> list[dict[str, str]]:
        """
        Wire entries of all populated declared attributes, in declaration order.

        Raises:
            IncompleteRecord: a required attribute is undefined.
        """
        entries: list[dict[str, str]] = []
        for attr in self._attributes.values():
            if attr.is_required() and not attr.is_defined():
                raise IncompleteRecord(attr.name)
            if attr.is_defined():
                # multiple values become sibling entries
                entries.extend(attr.to_array())
        return entries

    def to_array(self) -> dict:
        attributes = self.get_attributes()
        source = self._attributes.get("source") or self._generated.get("source")
        return {
            "source": {"id": source.get_value() if source else None},
            "attributes": {"attribute": attributes},
        }

    def json_serialize(self) -> dict:
        return {"objects": {"object": [self.to_array()]}}

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.json_serialize(), **kwargs)

    def is_valid(self) -> bool:
        # generated attributes are never required
        return not any(
            attr.is_required() and not attr.is_defined()
            for attr in self._attributes.values()
        )

    # map-style access

    def contains(self, name: str) -> bool:
        """
        Check if an attribute exists, but not if it is populated.
        """
        return name in self._attributes or name in self._generated

    def get(self, name: str) -> str | list[str] | None:
        return self.get_attribute(name).get_value()

    def set(self, name: str, value: Any) -> "Record":
        return self.set_attribute(name, value)

    def unset(self, name: str) -> None:
        if name in self._attributes:
            self._attributes[name].unset()

    def _defined(self) -> Iterator[Attribute]:
        for attr in self._attributes.values():
            if attr.is_defined():
                yield attr
        for attr in self._generated.values():
            if attr.is_defined():
                yield attr

    def iterate(self) -> Iterator[tuple[str, Attribute]]:
        """
        Yield (name, attribute) for every defined attribute, generated ones included.

        The attributes are copies, changing them does not change the record.
        """
        for attr in self._defined():
            yield attr.name, copy.deepcopy(attr)

    def size(self) -> int:
        return sum(1 for _ in self._defined())

    def __str__(self) -> str:
        try:
            key = self.get_primary_key()
        except PrimaryKeyUndefined:
            key = ""
        lines = [f"{camel_case(self._type)} ({key}):"]
        for name, attr in self.iterate():
            value = attr.get_value()
            for item in value if isinstance(value, list) else [value]:
                lines.append(f"   {name:<20} {item}")
        return "\n".join(lines) + "\n"
