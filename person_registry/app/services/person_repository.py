"""
In‑memory storage behind the development API.

The development API stands in for the real person service during local
work and tests.  Records live in a dictionary for the lifetime of the
process; identifiers are assigned sequentially starting at 1.
"""

from __future__ import annotations

import itertools
import logging
from typing import Dict, List, Optional

from person_registry.app.schemas.person import Person, PersonPayload


logger = logging.getLogger(__name__)


class PersonRepository:
    """Dictionary backed person collection."""

    def __init__(self) -> None:
        self._people: Dict[int, Person] = {}
        self._ids = itertools.count(1)

    async def list_people(self) -> List[Person]:
        """Return all people in creation order."""
        return list(self._people.values())

    async def create_person(self, data: PersonPayload) -> Person:
        person = Person(id=next(self._ids), **data.model_dump())
        self._people[person.id] = person
        logger.info("Created person %s", person.id)
        return person

    async def update_person(self, person_id: int, data: PersonPayload) -> Optional[Person]:
        """Replace all fields of a person.  Returns ``None`` if absent."""
        if person_id not in self._people:
            return None
        person = Person(id=person_id, **data.model_dump())
        self._people[person_id] = person
        logger.info("Updated person %s", person_id)
        return person

    async def delete_person(self, person_id: int) -> bool:
        if self._people.pop(person_id, None) is None:
            return False
        logger.info("Deleted person %s", person_id)
        return True

    def reset(self) -> None:
        self._people.clear()
        self._ids = itertools.count(1)


repository = PersonRepository()


def get_repository() -> PersonRepository:
    """FastAPI dependency returning the process wide repository."""
    return repository
