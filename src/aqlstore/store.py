"""Read and write the people.aql file.

PersonStore is the public API:
    store = PersonStore("/path/to/people.aql")
    pid = store.add(Person(name="Alice", age=30, city="Springfield"))
    store.update(Person(id=pid, name="Alice", age=31, city="Springfield"))
    store.delete(pid)

Writes:
    add            appends one block (after a newline if the file lacks a final one);
                   existing bytes are never touched
    update/delete  read all, then rewrite header + every record (tmp + rename)

There is no locking. Two writers on the same file can lose updates; callers
that share a store across threads must serialize calls themselves.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from aqlstore.codec import HEADER, FormatError, decode_people, encode_file, encode_person
from aqlstore.models import Person

logger = logging.getLogger("aqlstore.store")

EMPTY_PLACEHOLDER = "AQL store is empty. No records yet."


class PersonStore:
    """Flat-file person store."""

    def __init__(self, path: Path | str, *, strict: bool = False) -> None:
        self.path = Path(path)
        self.strict = strict
        self.bootstrap()

    # ------------------------------------------------------------------
    # Bootstrap
    # ------------------------------------------------------------------

    def bootstrap(self) -> None:
        """Create the parent directory, and the file with its header if missing."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.write_text(HEADER, encoding="utf-8")
            logger.info("created store: %s", self.path)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_all(self) -> list[Person]:
        """Load every record in file order. Full read on every call."""
        if not self.path.exists():
            return []
        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            msg = f"{self.path} is not valid UTF-8: {exc}"
            raise FormatError(msg) from exc
        return decode_people(text, strict=self.strict)

    def get(self, person_id: int) -> Person | None:
        for p in self.get_all():
            if p.id == person_id:
                return p
        return None

    def next_id(self) -> int:
        """1 for an empty store, else max(id) + 1. Freed ids below the max stay unused."""
        people = self.get_all()
        return max(p.id for p in people) + 1 if people else 1

    def read_raw(self) -> str:
        """Entire file text as stored (line endings untouched), or a placeholder when missing.

        Bytes that are not valid UTF-8 come back as U+FFFD.
        """
        if not self.path.exists():
            return EMPTY_PLACEHOLDER
        with self.path.open(encoding="utf-8", errors="replace", newline="") as f:
            return f.read()

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def add(self, person: Person) -> int:
        """Assign the next id to `person` and append it. Returns the id."""
        person.id = self.next_id()
        if not self.path.exists():
            self.bootstrap()
        block = encode_person(person)
        if not self._ends_with_newline():
            block = "\n" + block
        with self.path.open("a", encoding="utf-8") as f:
            f.write(block)
        logger.info("added person %d", person.id)
        return person.id

    def update(self, person: Person) -> None:
        """Replace the record with person.id in place. Unknown id is a no-op."""
        people = self.get_all()
        for i, p in enumerate(people):
            if p.id == person.id:
                people[i] = person
                break
        else:
            logger.debug("update: no person %d", person.id)
            return
        self._rewrite(people)
        logger.info("updated person %d", person.id)

    def delete(self, person_id: int) -> None:
        """Remove every record with person_id. Unknown id is a no-op."""
        people = self.get_all()
        kept = [p for p in people if p.id != person_id]
        if len(kept) == len(people):
            logger.debug("delete: no person %d", person_id)
            return
        self._rewrite(kept)
        logger.info("deleted person %d", person_id)

    def save(self, person: Person) -> int:
        """Add when person has no id yet, otherwise update. Returns the id."""
        if person.id <= 0:
            return self.add(person)
        self.update(person)
        return person.id

    def export(self, person_id: int, dest_dir: Path | str) -> Path | None:
        """Write one record's block to dest_dir/person_<id>.aql."""
        person = self.get(person_id)
        if person is None:
            return None
        dest = Path(dest_dir)
        dest.mkdir(parents=True, exist_ok=True)
        out = dest / f"person_{person.id}.aql"
        out.write_text(encode_person(person), encoding="utf-8")
        logger.info("exported person %d to %s", person.id, out)
        return out

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _ends_with_newline(self) -> bool:
        """True for an empty file or one whose last byte is a newline."""
        with self.path.open("rb") as f:
            if f.seek(0, os.SEEK_END) == 0:
                return True
            f.seek(-1, os.SEEK_END)
            return f.read(1) == b"\n"

    def _rewrite(self, people: list[Person]) -> None:
        """Write header + records to a temp file, then rename over the store."""
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            f.write(encode_file(people))
        tmp.replace(self.path)
