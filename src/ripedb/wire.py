"""
pydantic models for the REST wire format and the metadata templates,
and loading of records from wire data.
"""
from enum import StrEnum
from typing import Iterable, TYPE_CHECKING
from pydantic import BaseModel, ConfigDict, Field
from structlog import get_logger
from .exceptions import UnknownRecordType
from .record import Record

if TYPE_CHECKING:  # pragma: no cover
    from .schemas import SchemaRegistry

log = get_logger()


class Requirement(StrEnum):
    mandatory = "MANDATORY"
    optional = "OPTIONAL"
    generated = "GENERATED"


class Cardinality(StrEnum):
    single = "SINGLE"
    multiple = "MULTIPLE"


PRIMARY_KEY = "PRIMARY_KEY"


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class WireAttribute(_WireModel):
    name: str
    value: str
    referenced_type: str | None = Field(None, alias="referenced-type")
    comment: str | None = None


class WireAttributes(_WireModel):
    attribute: list[WireAttribute] = []


class WireSource(_WireModel):
    id: str | None = None


class WireObject(_WireModel):
    type: str | None = None
    source: WireSource = WireSource()
    attributes: WireAttributes = WireAttributes()


class WireObjects(_WireModel):
    object: list[WireObject] = []


class WireDocument(_WireModel):
    objects: WireObjects = WireObjects()


class TemplateAttribute(_WireModel):
    """
    One entry of a template descriptor.

    requirement and cardinality are kept as plain strings, the server may
    send values beyond the known ones.
    """

    name: str
    keys: list[str] = []
    requirement: str = Requirement.optional
    cardinality: str = Cardinality.single

    @property
    def is_primary_key(self) -> bool:
        return PRIMARY_KEY in self.keys

    @property
    def required(self) -> bool:
        return self.requirement == Requirement.mandatory

    @property
    def multiple(self) -> bool:
        return self.cardinality == Cardinality.multiple


class TemplateAttributes(_WireModel):
    attribute: list[TemplateAttribute] = []


class Template(_WireModel):
    type: str
    attributes: TemplateAttributes = TemplateAttributes()


class Templates(_WireModel):
    template: list[Template] = []


class TemplateDocument(_WireModel):
    templates: Templates = Templates()


def load_record(
    data: dict | WireObject,
    registry: "SchemaRegistry | None" = None,
    descriptor: Iterable[dict | TemplateAttribute] | None = None,
) -> Record:
    """
    Build a record from one wire object.

    Known types are created from the registry, otherwise a descriptor is
    required to build a dummy record.

    Raises:
        UnknownRecordType: no schema and no descriptor for the object's type.
        AttributeNotFound: the object carries an attribute the schema lacks.
    """
    from .dummy import factory
    from .schemas import registry as default_registry

    obj = data if isinstance(data, WireObject) else WireObject.model_validate(data)
    registry = registry or default_registry
    record_type = obj.type or (
        obj.attributes.attribute[0].name if obj.attributes.attribute else None
    )
    if record_type is None:
        raise UnknownRecordType("wire object has no type and no attributes")

    if descriptor is not None:
        record = factory(record_type, descriptor)
    elif record_type in registry:
        record = registry.create(record_type)
    else:
        raise UnknownRecordType(
            f"no schema for {record_type}; pass a template descriptor"
        )

    for attr in obj.attributes.attribute:
        record.add_attribute(attr.name, attr.value)
    log.debug("loaded record", type=record_type, attributes=record.size())
    return record


def load_records(
    data: dict | WireDocument,
    registry: "SchemaRegistry | None" = None,
    descriptor: Iterable[dict | TemplateAttribute] | None = None,
) -> list[Record]:
    doc = data if isinstance(data, WireDocument) else WireDocument.model_validate(data)
    if descriptor is not None:
        descriptor = list(descriptor)
    return [load_record(obj, registry, descriptor) for obj in doc.objects.object]
