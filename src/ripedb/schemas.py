"""
Declarative record schemas and the registry mapping record types to them.
"""
from pydantic import BaseModel, ConfigDict, model_validator
from structlog import get_logger
from .exceptions import UnknownRecordType
from .record import Record

log = get_logger()


class AttributeSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    required: bool = False
    multiple: bool = False


class RecordSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    primary_key: str
    attributes: list[AttributeSpec]
    generated: list[AttributeSpec] = []

    @model_validator(mode="after")
    def check_names(self) -> "RecordSchema":
        names = [a.name for a in self.attributes + self.generated]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"duplicate attributes: {sorted(duplicates)}")
        if self.primary_key not in {a.name for a in self.attributes}:
            raise ValueError(f"primary key {self.primary_key} is not declared")
        return self

    def build(self) -> Record:
        record = Record(self.type, self.primary_key)
        for spec in self.attributes:
            record._create(spec.name, spec.required, spec.multiple)
        for spec in self.generated:
            record._create_generated(spec.name, spec.multiple)
        return record


def declare(
    type: str, primary_key: str, attributes: str, generated: str = ""
) -> RecordSchema:
    """
    Shorthand for declaring a schema.

    attributes is a whitespace separated list of "name:flags" where flags
    contain "r" for required and "m" for multiple, e.g. "mntner:r admin-c:rm".
    """

    def parse(text: str) -> list[AttributeSpec]:
        specs = []
        for item in text.split():
            name, _, flags = item.partition(":")
            specs.append(
                AttributeSpec(name=name, required="r" in flags, multiple="m" in flags)
            )
        return specs

    return RecordSchema(
        type=type,
        primary_key=primary_key,
        attributes=parse(attributes),
        generated=parse(generated),
    )


class SchemaRegistry:
    def __init__(self) -> None:
        self._schemas: dict[str, RecordSchema] = {}

    def __repr__(self) -> str:
        return f"SchemaRegistry({len(self._schemas)})"

    def __contains__(self, type: str) -> bool:
        return type in self._schemas

    def register(self, schema: RecordSchema) -> RecordSchema:
        if schema.type in self._schemas:
            log.warning("replacing schema", type=schema.type)
        self._schemas[schema.type] = schema
        return schema

    def get(self, type: str) -> RecordSchema:
        try:
            return self._schemas[type]
        except KeyError:
            raise UnknownRecordType(f"no schema registered for {type}") from None

    def types(self) -> list[str]:
        return sorted(self._schemas)

    def create(
        self, type: str, primary_key: str | None = None, *, source: str | None = None
    ) -> Record:
        """
        Create an empty record of a registered type.

        Args:
            type: record type
            primary_key: optional value for the primary key attribute
            source: optional value for the source attribute
        """
        schema = self.get(type)
        record = schema.build()
        if primary_key is not None:
            record.set_attribute(schema.primary_key, primary_key)
        if source is not None and record.contains("source"):
            record.set_attribute("source", source)
        return record


_GENERATED = "created last-modified"

registry = SchemaRegistry()

registry.register(
    declare(
        "mntner",
        "mntner",
        "mntner:r descr:m org:m admin-c:rm tech-c:m upd-to:rm mnt-nfy:m "
        "auth:rm remarks:m notify:m mnt-by:rm source:r",
        _GENERATED,
    )
)
registry.register(
    declare(
        "person",
        "nic-hdl",
        "person:r address:rm phone:rm fax-no:m e-mail:m org:m nic-hdl:r "
        "remarks:m notify:m mnt-by:rm source:r",
        _GENERATED,
    )
)
registry.register(
    declare(
        "role",
        "nic-hdl",
        "role:r address:rm phone:m fax-no:m e-mail:rm org:m admin-c:m tech-c:m "
        "nic-hdl:r remarks:m notify:m abuse-mailbox:m mnt-by:rm source:r",
        _GENERATED,
    )
)
registry.register(
    declare(
        "aut-num",
        "aut-num",
        "aut-num:r as-name:r descr:m member-of:m import-via:m import:m "
        "mp-import:m export-via:m export:m mp-export:m default:m mp-default:m "
        "remarks:m org:m sponsoring-org admin-c:rm tech-c:rm abuse-c "
        "notify:m mnt-lower:m mnt-routes:m mnt-by:rm source:r",
        _GENERATED + " status",
    )
)
registry.register(
    declare(
        "organisation",
        "organisation",
        "organisation:r org-name:r org-type:r descr:m remarks:m address:rm "
        "phone:m fax-no:m e-mail:rm geoloc language:m org:m admin-c:m tech-c:m "
        "abuse-c ref-nfy:m mnt-ref:rm notify:m mnt-by:rm abuse-mailbox source:r",
        _GENERATED,
    )
)
