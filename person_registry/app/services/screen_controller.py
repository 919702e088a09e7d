"""
Record management screen.

``ScreenController`` wires user actions to the record store, the
search filter, the form controller and the remote service:

* ``start`` loads the collection once and fills the store.
* ``search`` recomputes the filtered view on every query change.
* ``delete`` removes a record remotely, then locally.
* ``open_new``/``open_edit``/``close_form``/``submit_form`` drive the
  create/edit form.
* ``reload`` re‑fetches the collection on demand.

Nothing is changed locally before the service confirms it.  Remote
failures are logged and reported through the notifier.
"""

import logging
from datetime import timezone, tzinfo
from typing import Optional, Tuple

from ..core.errors import NotFoundError, RemoteServiceError
from ..schemas.person import Person
from .form_controller import FormController
from .notifications import Notifier
from .person_service import RemoteRecordService
from .record_store import RecordStore
from .search import matches_query


logger = logging.getLogger(__name__)


class ScreenController:
    """Composes store, search, form and remote service for one screen."""

    def __init__(
        self,
        service: RemoteRecordService,
        *,
        store: Optional[RecordStore] = None,
        notifier: Optional[Notifier] = None,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self.service = service
        self.store = store or RecordStore()
        self.notifier = notifier or Notifier()
        self.tz = tz
        self.form = FormController(service, self.store, self.notifier, tz=tz)
        self.query = ""
        self.load_error: Optional[str] = None

    @property
    def people(self) -> Tuple[Person, ...]:
        """Records currently shown (the filtered view)."""
        return self.store.filtered

    async def start(self) -> bool:
        """Initial load.  On failure the list is left empty."""
        try:
            people = await self.service.list()
        except RemoteServiceError as exc:
            logger.error("Initial load failed: %s", exc)
            self.store.load([])
            self.load_error = str(exc)
            self.notifier.error("Error loading people")
            return False
        self.store.load(people)
        self.load_error = None
        self.query = ""
        logger.info("Loaded %d people", len(people))
        return True

    async def reload(self) -> bool:
        """Re‑fetch the collection, keeping the current search query.

        A failed reload keeps the records already on screen.
        """
        try:
            people = await self.service.list()
        except RemoteServiceError as exc:
            logger.error("Reload failed: %s", exc)
            self.notifier.error("Error loading people")
            return False
        self.store.load(people)
        self.load_error = None
        if self.query:
            self.store.apply_filter(matches_query(self.query))
        return True

    def search(self, query: str) -> Tuple[Person, ...]:
        self.query = query
        return self.store.apply_filter(matches_query(query))

    async def delete(self, person_id: int) -> bool:
        """Delete a person remotely, then from the store.

        Raises ``NotFoundError`` without calling the service when the id
        is not in the store.
        """
        if person_id not in self.store:
            raise NotFoundError(person_id)
        try:
            await self.service.delete(person_id)
        except RemoteServiceError as exc:
            logger.error("Delete of person %s failed: %s", person_id, exc)
            self.notifier.error("Error deleting person")
            return False
        try:
            self.store.remove(person_id)
        except NotFoundError:
            logger.warning("Person %s was already removed locally", person_id)
        if self.form.target_id == person_id:
            logger.info("Closing the form on deleted person %s", person_id)
            self.form.cancel()
        self.notifier.success("Person deleted successfully")
        return True

    def open_new(self) -> None:
        self.form.open_create()

    def open_edit(self, person_id: int) -> None:
        self.form.open_edit(self.store.get(person_id))

    def close_form(self) -> None:
        self.form.cancel()

    async def submit_form(self) -> Optional[Person]:
        return await self.form.submit()
