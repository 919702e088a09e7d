"""Name/email search over the authoritative person list.

``search_people`` is the pure search: it takes a list and a query and
returns the matches, keeping no state between calls.
``ScreenController.search`` passes the same ``matches_query``
predicate to ``RecordStore.apply_filter``, so the filtered view always
equals ``search_people(store.records, query)``.
"""

from typing import Callable, Iterable, List

from ..schemas.person import Person


def matches_query(query: str) -> Callable[[Person], bool]:
    """Build a predicate matching ``query`` in name or email, ignoring case.

    An empty query matches every record.
    """
    needle = query.lower()

    def predicate(person: Person) -> bool:
        return needle in person.name.lower() or needle in person.email.lower()

    return predicate


def search_people(records: Iterable[Person], query: str) -> List[Person]:
    """Return the records matching ``query`` in their original order.

    Pure function for callers that hold a plain list; the screen
    filters through ``RecordStore.apply_filter(matches_query(query))``.
    """
    predicate = matches_query(query)
    return [person for person in records if predicate(person)]
