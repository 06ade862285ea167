from typing import Iterable
from .record import Record
from .wire import TemplateAttribute, TemplateDocument


class Dummy(Record):
    """
    A record whose attributes come from a template descriptor instead of
    a registered schema.

    Useful when the registered schemas are outdated and a conformant
    record is needed anyway.
    """

    def __init__(self, type: str, primary_key: str | None = None):
        super().__init__(type, primary_key)

    def setup_attribute(self, name: str, required: bool, multiple: bool) -> None:
        self._create(name, required, multiple)

    @classmethod
    def from_template(cls, document: dict | TemplateDocument) -> "Dummy":
        """
        Build a dummy from a metadata service template document,
        using its first template.
        """
        doc = (
            document
            if isinstance(document, TemplateDocument)
            else TemplateDocument.model_validate(document)
        )
        if not doc.templates.template:
            raise ValueError("template document contains no template")
        template = doc.templates.template[0]
        return factory(template.type, template.attributes.attribute)


def factory(type: str, descriptor: Iterable[dict | TemplateAttribute]) -> Dummy:
    """
    Create a dummy record from a template descriptor.

    Args:
        type: record type, e.g. "mntner"
        descriptor: attribute entries with name, keys, requirement & cardinality,
            in the order the attributes should be serialized

    Returns:
        A dummy without primary key if no entry is tagged PRIMARY_KEY.
    """
    entries = [
        e if isinstance(e, TemplateAttribute) else TemplateAttribute.model_validate(e)
        for e in descriptor
    ]

    key = None
    for entry in entries:
        if entry.is_primary_key:
            key = entry.name
            break

    obj = Dummy(type, key)
    for entry in entries:
        obj.setup_attribute(entry.name, entry.required, entry.multiple)
    return obj
