"""Generate test records: `aql generate`.

Records are added one at a time through PersonStore.add, so each one is a
single append and nothing is rewritten.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from aqlstore.models import Person

if TYPE_CHECKING:
    from aqlstore.store import PersonStore

logger = logging.getLogger("aqlstore.seed")

_MIN_AGE = 18
_MAX_AGE = 59
_CITY_COUNT = 100


def generate(store: PersonStore, count: int, *, rng: random.Random | None = None) -> list[int]:
    """Add `count` generated people. Returns the assigned ids in order."""
    if count < 0:
        msg = f"count must be >= 0, got {count}"
        raise ValueError(msg)
    rng = rng or random.Random()

    # Ids are max+1 on every add, so they run start, start+1, ...
    start = store.next_id()
    ids: list[int] = []
    for i in range(count):
        person = Person(
            name=f"Person {start + i}",
            age=rng.randint(_MIN_AGE, _MAX_AGE),
            city=f"City {rng.randint(1, _CITY_COUNT)}",
        )
        ids.append(store.add(person))
    logger.info("generated %d people", len(ids))
    return ids
