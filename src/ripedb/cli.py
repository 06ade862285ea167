import json
import typer
from pathlib import Path
from typing import List, NoReturn, Optional
from typing_extensions import Annotated
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from structlog import get_logger

from .config import load_config
from .dummy import factory
from .exceptions import RipeDBError
from .record import Record
from .schemas import registry
from .wire import TemplateAttribute, TemplateDocument, load_records

app = typer.Typer()
log = get_logger()


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED)
    raise typer.Exit(1)


def _read_json(path: Path) -> dict | list:
    try:
        return json.loads(path.read_text())
    except (OSError, ValueError) as e:
        _fail(f"Cannot read {path}: {e}")


def _load_descriptor(path: Path) -> tuple[str | None, list[TemplateAttribute]]:
    """
    A descriptor file holds either a bare list of attribute entries
    or a metadata service template document.
    """
    data = _read_json(path)
    try:
        if isinstance(data, list):
            return None, [TemplateAttribute.model_validate(e) for e in data]
        doc = TemplateDocument.model_validate(data)
    except ValidationError as e:
        _fail(f"Invalid template {path}: {e.error_count()} errors")
    if not doc.templates.template:
        _fail(f"Invalid template {path}: no template")
    template = doc.templates.template[0]
    return template.type, template.attributes.attribute


def _load(file: Path, template: Path | None) -> list[Record]:
    descriptor = _load_descriptor(template)[1] if template else None
    try:
        records = load_records(_read_json(file), descriptor=descriptor)  # type: ignore
    except ValidationError as e:
        _fail(f"Invalid object file {file}: {e.error_count()} errors")
    except RipeDBError as e:
        _fail(str(e))
    log.debug("loaded", file=str(file), records=len(records))
    return records


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, help="Override RIPEDB_LOG_LEVEL."),
) -> None:
    overrides = {"log_level": log_level} if log_level else {}
    ctx.obj = load_config(**overrides)


@app.command()
def types() -> None:
    """
    List the registered record types.
    """
    table = Table()
    table.add_column("Type")
    table.add_column("Primary Key")
    table.add_column("Attributes", justify="right")
    for name in registry.types():
        schema = registry.get(name)
        table.add_row(name, schema.primary_key, str(len(schema.attributes)))
    Console().print(table)


@app.command()
def template(
    file: Path,
    type: Optional[str] = typer.Option(None, help="Type for a bare descriptor."),
) -> None:
    """
    Build a dummy record from a template descriptor and show its attributes.
    """
    template_type, descriptor = _load_descriptor(file)
    record_type = type or template_type
    if not record_type:
        _fail("Missing record type; pass --type for a bare descriptor")
    dummy = factory(record_type, descriptor)  # type: ignore

    table = Table(title=f"{record_type} ({dummy.get_primary_key_name() or '-'})")
    table.add_column("Attribute")
    table.add_column("Required")
    table.add_column("Multiple")
    for entry in descriptor:
        attr = dummy.get_attribute(entry.name)
        table.add_row(
            attr.name,
            "yes" if attr.is_required() else "no",
            "yes" if attr.is_multiple() else "no",
        )
    Console().print(table)


@app.command()
def render(
    file: Path,
    template: Annotated[Optional[Path], typer.Option()] = None,
) -> None:
    """
    Print the objects of a wire document as text.
    """
    for record in _load(file, template):
        typer.echo(str(record))


@app.command()
def validate(
    file: Path,
    template: Annotated[Optional[Path], typer.Option()] = None,
) -> None:
    """
    Check that every object of a wire document has its required attributes.
    """
    invalid = 0
    for record in _load(file, template):
        try:
            record.to_array()
        except RipeDBError as e:
            invalid += 1
            typer.secho(f"{record.get_type()}: {e}", fg=typer.colors.RED)
        else:
            typer.secho(f"{record.get_type()}: ok", fg=typer.colors.GREEN)
    if invalid:
        raise typer.Exit(1)


@app.command()
def new(
    ctx: typer.Context,
    type: str,
    attr: Annotated[Optional[List[str]], typer.Option(help="name=value")] = None,
) -> None:
    """
    Create a record of a registered type and print its JSON payload.
    """
    items = []
    for item in attr or []:
        name, sep, value = item.partition("=")
        if not sep:
            _fail(f"Invalid attribute {item}; use name=value")
        items.append((name, value))
    # the configured source only applies when none is given
    source = ctx.obj.default_source
    if any(name == "source" for name, _ in items):
        source = None
    try:
        record = registry.create(type, source=source)
        for name, value in items:
            record.add_attribute(name, value)
        typer.echo(record.to_json(indent=2))
    except RipeDBError as e:
        _fail(str(e))


if __name__ == "__main__":
    app()
