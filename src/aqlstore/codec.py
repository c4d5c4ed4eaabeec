"""Encode and decode person records in the .aql text format.

File layout:

    aql_version: 1.0          # header (3 lines, written once, kept on rewrite)
    entity: person
    ---
    - id: 1                   # record start marker
      name: "Alice"           # continuation lines: two-space indent
      age: 30
      city: "Springfield"

Text values are wrapped in double quotes with no escaping, so a `"` or a
newline inside name/city produces a block that will not decode back to the
same value. Callers that need such values must reject them before saving.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from aqlstore.models import Person

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

HEADER = "aql_version: 1.0\nentity: person\n---\n"

_RECORD_MARKER = "- id:"
_INT_RE = re.compile(r"^[+-]?[0-9]+$")


class FormatError(ValueError):
    """Raised when a record field cannot be decoded."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


def parse_int(token: str, *, field: str = "value", line: int | None = None) -> int:
    """Parse a base-10 integer token (optional sign, digits only)."""
    token = token.strip()
    if not _INT_RE.match(token):
        msg = f"invalid integer for {field}: {token!r}"
        raise FormatError(msg, line=line)
    return int(token, 10)


def _value(line: str) -> str:
    return line.partition(":")[2].strip()


def _text(line: str) -> str:
    return _value(line).strip('"')


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------


def encode_person(person: Person) -> str:
    """Render one record as its canonical block (newline-terminated)."""
    return (
        f"- id: {person.id}\n"
        f'  name: "{person.name}"\n'
        f"  age: {person.age}\n"
        f'  city: "{person.city}"\n'
    )


def encode_file(people: Iterable[Person]) -> str:
    """Render header + every record, in the given order."""
    return HEADER + "".join(encode_person(p) for p in people)


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


def iter_blocks(lines: Iterable[str]) -> Iterator[tuple[int, list[str]]]:
    """Split lines into record blocks.

    Yields (1-based line number of the marker, block lines). Lines before the
    first marker (header, blanks) belong to no block.
    """
    start = 0
    block: list[str] = []
    for lineno, line in enumerate(lines, start=1):
        if line.startswith(_RECORD_MARKER):
            if block:
                yield start, block
            start, block = lineno, [line]
        elif block:
            block.append(line)
    if block:
        yield start, block


def decode_block(lines: list[str], *, strict: bool = False, start_line: int | None = None) -> Person | None:
    """Decode one block into a Person.

    Malformed integers always raise FormatError. A block without a positive
    id returns None, or raises FormatError when strict. Unrecognised lines
    are ignored.
    """
    person: Person | None = None
    for offset, line in enumerate(lines):
        lineno = start_line + offset if start_line is not None else None
        if line.startswith(_RECORD_MARKER):
            if person is not None:
                # A second marker belongs to the next block; iter_blocks never produces this.
                break
            person = Person(id=parse_int(_value(line), field="id", line=lineno))
        elif person is None:
            continue
        elif line.startswith("  name:"):
            person.name = _text(line)
        elif line.startswith("  age:"):
            person.age = parse_int(_value(line), field="age", line=lineno)
        elif line.startswith("  city:"):
            person.city = _text(line)

    if person is None or person.id <= 0:
        if strict:
            found = "missing" if person is None else person.id
            msg = f"record id must be a positive integer, got {found}"
            raise FormatError(msg, line=start_line)
        return None
    return person


def decode_people(text: str, *, strict: bool = False) -> list[Person]:
    """Decode every record in a whole file's text, in file order."""
    people: list[Person] = []
    for start, block in iter_blocks(text.splitlines()):
        person = decode_block(block, strict=strict, start_line=start)
        if person is not None:
            people.append(person)
    return people
