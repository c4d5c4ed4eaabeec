"""Data models for the person store."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any


@dataclass
class Person:
    """A single record from people.aql."""

    id: int = 0                  # 0 = not yet assigned; the store assigns ids on add
    name: str = ""
    age: int = 0
    city: str = ""


@dataclass(frozen=True)
class PersonForm:
    """Raw form input: every field is text as typed, None = field left untouched."""

    name: str | None = None
    age: str | None = None
    city: str | None = None


def apply_form(selection: Person | None, form: PersonForm) -> Person:
    """Return the record a save should write, without touching `selection`.

    With no selection the result is a new record (id 0, so the store assigns
    one). With a selection, fields the form leaves as None keep the selected
    record's values. Empty age text counts as 0.
    """
    # Local import: codec imports models at module level.
    from aqlstore.codec import parse_int

    base = selection if selection is not None else Person()
    changes: dict[str, Any] = {}
    if form.name is not None:
        changes["name"] = form.name
    if form.city is not None:
        changes["city"] = form.city
    if form.age is not None:
        changes["age"] = parse_int(form.age.strip() or "0", field="age")
    return dataclasses.replace(base, **changes)
