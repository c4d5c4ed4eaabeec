"""aql CLI: person records in a flat .aql file.

Commands:
    aql init                       create aql.toml + the store file
    aql list                       one line per record
    aql show ID                    print a record's block
    aql add --name N --age A       add a record, print its id
    aql update ID [--name ...]     change fields of an existing record
    aql delete ID                  remove a record
    aql raw                        dump the store file
    aql generate [COUNT]           add generated test records
    aql export ID [--out DIR]      write one record to person_<id>.aql
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

import click

from aqlstore.codec import FormatError, encode_person
from aqlstore.config import AqlConfig, init_config, load_config
from aqlstore.models import PersonForm, apply_form
from aqlstore.seed import generate as generate_people
from aqlstore.store import PersonStore

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_cfg(ctx: click.Context) -> AqlConfig:
    try:
        return load_config(ctx.obj.get("root"))
    except Exception as exc:
        raise click.ClickException(str(exc)) from exc


def _open_store(ctx: click.Context) -> PersonStore:
    cfg = _load_cfg(ctx)
    try:
        return PersonStore(cfg.store_path, strict=cfg.store.strict)
    except OSError as exc:
        raise click.ClickException(f"Cannot open store {cfg.store_path}: {exc}") from exc


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


class _StoreGroup(click.Group):
    """Turns store errors raised by any command into clean CLI errors."""

    def invoke(self, ctx: click.Context) -> object:
        try:
            return super().invoke(ctx)
        except FormatError as exc:
            raise click.ClickException(f"Corrupt store: {exc}") from exc
        except OSError as exc:
            raise click.ClickException(str(exc)) from exc


@click.group(cls=_StoreGroup)
@click.version_option(package_name="aqlstore")
@click.option("--config-dir", "root", default=None, help="Project root (default: search upward for aql.toml)")
@click.option("-v", "--verbose", is_flag=True, help="Log store operations to stderr")
@click.pass_context
def cli(ctx: click.Context, root: str | None, verbose: bool) -> None:
    """aql: flat-file person store."""
    ctx.ensure_object(dict)
    ctx.obj["root"] = root
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(message)s")


# ---------------------------------------------------------------------------
# aql init
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--dir", "root", default=".", show_default=True, help="Project root")
def init(root: str) -> None:
    """Create aql.toml and the store file in the current project."""
    root_path = Path(root).resolve()
    try:
        config_path = init_config(root_path)
        click.echo(f"Created {config_path}")
    except FileExistsError:
        click.echo("aql.toml already exists, skipping init")

    cfg = load_config(root_path)
    PersonStore(cfg.store_path, strict=cfg.store.strict)
    click.echo(f"Store : {cfg.store_path}")


# ---------------------------------------------------------------------------
# aql list / show / raw
# ---------------------------------------------------------------------------


@cli.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """List every record in file order."""
    people = _open_store(ctx).get_all()
    if not people:
        click.echo("(no records)")
        return
    for p in people:
        click.echo(f"{p.id:>5}  {p.name}  {p.age}  {p.city}")


@cli.command()
@click.argument("person_id", type=int)
@click.pass_context
def show(ctx: click.Context, person_id: int) -> None:
    """Print one record as it is stored."""
    person = _open_store(ctx).get(person_id)
    if person is None:
        raise click.ClickException(f"Not found: {person_id}")
    click.echo(encode_person(person), nl=False)


@cli.command()
@click.pass_context
def raw(ctx: click.Context) -> None:
    """Dump the store file verbatim."""
    click.echo(_open_store(ctx).read_raw(), nl=False)


# ---------------------------------------------------------------------------
# aql add / update / delete
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--name", default="", help="Name")
@click.option("--age", default="0", help="Age (integer)")
@click.option("--city", default="", help="City")
@click.pass_context
def add(ctx: click.Context, name: str, age: str, city: str) -> None:
    """Add a record and print its assigned id."""
    store = _open_store(ctx)
    try:
        person = apply_form(None, PersonForm(name=name, age=age, city=city))
    except FormatError as exc:
        raise click.BadParameter(str(exc), param_hint="--age") from exc
    click.echo(store.save(person))


@cli.command()
@click.argument("person_id", type=int)
@click.option("--name", default=None, help="New name")
@click.option("--age", default=None, help="New age (integer)")
@click.option("--city", default=None, help="New city")
@click.pass_context
def update(ctx: click.Context, person_id: int, name: str | None, age: str | None, city: str | None) -> None:
    """Change fields of an existing record. Unset options keep their values."""
    store = _open_store(ctx)
    selected = store.get(person_id)
    if selected is None:
        raise click.ClickException(f"Not found: {person_id}")
    try:
        person = apply_form(selected, PersonForm(name=name, age=age, city=city))
    except FormatError as exc:
        raise click.BadParameter(str(exc), param_hint="--age") from exc
    store.save(person)
    click.echo(f"Updated {person_id}")


@cli.command()
@click.argument("person_id", type=int)
@click.pass_context
def delete(ctx: click.Context, person_id: int) -> None:
    """Delete a record by id."""
    store = _open_store(ctx)
    if store.get(person_id) is None:
        click.echo(f"Not found: {person_id}")
        return
    store.delete(person_id)
    click.echo(f"Deleted {person_id}")


# ---------------------------------------------------------------------------
# aql generate / export
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("count", type=click.IntRange(min=0), default=500)
@click.option("--seed", type=int, default=None, help="Random seed for reproducible data")
@click.pass_context
def generate(ctx: click.Context, count: int, seed: int | None) -> None:
    """Add COUNT generated test records (default 500)."""
    store = _open_store(ctx)
    ids = generate_people(store, count, rng=random.Random(seed))
    if not ids:
        click.echo("Generated 0 records")
        return
    click.echo(f"Generated {len(ids)} records (ids {ids[0]}..{ids[-1]})")


@cli.command()
@click.argument("person_id", type=int)
@click.option("--out", "out_dir", default=".", show_default=True, help="Directory to write into")
@click.pass_context
def export(ctx: click.Context, person_id: int, out_dir: str) -> None:
    """Write one record to person_<id>.aql."""
    path = _open_store(ctx).export(person_id, out_dir)
    if path is None:
        raise click.ClickException(f"Not found: {person_id}")
    click.echo(str(path))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    cli(standalone_mode=True)


if __name__ == "__main__":
    main()
