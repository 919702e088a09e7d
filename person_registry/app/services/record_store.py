"""
In‑memory record store.

``RecordStore`` is the only place where the screen keeps person
records.  It holds the authoritative list, as last reported by the
remote service, and the filtered view shown to the user.  Every
mutation goes through its methods so both lists stay consistent: each
record in the filtered view is the same object that sits in the
authoritative list.
"""

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from ..core.errors import NotFoundError
from ..schemas.person import Person


logger = logging.getLogger(__name__)

Predicate = Callable[[Person], bool]


class RecordStore:
    """Authoritative person list plus its filtered projection."""

    def __init__(self) -> None:
        self._records: List[Person] = []
        self._filtered: List[Person] = []

    @property
    def records(self) -> Tuple[Person, ...]:
        return tuple(self._records)

    @property
    def filtered(self) -> Tuple[Person, ...]:
        return tuple(self._filtered)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, person_id: object) -> bool:
        return any(record.id == person_id for record in self._records)

    def get(self, person_id: int) -> Person:
        """Return the record with ``person_id`` or raise ``NotFoundError``."""
        index = self._index_of(self._records, person_id)
        if index is None:
            raise NotFoundError(person_id)
        return self._records[index]

    def load(self, records: Iterable[Person]) -> None:
        """Replace all records and reset the filtered view to the full list."""
        loaded = list(records)
        ids = [record.id for record in loaded]
        if len(set(ids)) != len(ids):
            raise ValueError("Loaded records contain duplicate ids")
        self._records = loaded
        self._filtered = list(loaded)
        logger.debug("Loaded %d records", len(loaded))

    def add(self, record: Person) -> None:
        """Append a newly created record to both lists."""
        if record.id in self:
            raise ValueError(f"Person {record.id} is already in the store")
        self._records.append(record)
        self._filtered.append(record)

    def update(self, person_id: int, record: Person) -> None:
        """Replace the record with ``person_id`` in place in both lists."""
        index = self._index_of(self._records, person_id)
        if index is None:
            raise NotFoundError(person_id)
        if record.id != person_id and record.id in self:
            raise ValueError(f"Person {record.id} is already in the store")
        self._records[index] = record
        filtered_index = self._index_of(self._filtered, person_id)
        if filtered_index is not None:
            self._filtered[filtered_index] = record

    def remove(self, person_id: int) -> Person:
        """Drop the record with ``person_id`` from both lists and return it."""
        index = self._index_of(self._records, person_id)
        if index is None:
            raise NotFoundError(person_id)
        removed = self._records.pop(index)
        self._filtered = [record for record in self._filtered if record.id != person_id]
        return removed

    def apply_filter(self, predicate: Predicate) -> Tuple[Person, ...]:
        """Recompute the filtered view from the authoritative list."""
        self._filtered = [record for record in self._records if predicate(record)]
        return self.filtered

    @staticmethod
    def _index_of(records: List[Person], person_id: int) -> Optional[int]:
        for index, record in enumerate(records):
            if record.id == person_id:
                return index
        return None
