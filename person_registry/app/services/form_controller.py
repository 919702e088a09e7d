"""
Create/edit form workflow.

``FormController`` is a small state machine:

* ``CLOSED`` – no form is shown and no record is targeted.
* ``CREATING`` – the form is open with blank fields.
* ``EDITING`` – the form is open on exactly one existing record
  (``target_id``) with its values pre‑populated.

``submit`` validates the fields first and stays in the current mode,
with per‑field messages in ``errors``, when validation fails.  Valid
values are sent to the remote service as a create or an update; the
returned record is applied to the record store and the form closes.
A remote failure is reported through the notifier and leaves the
fields untouched so the user can retry.

Every open and close bumps ``generation``.  A submit remembers the
generation it started in; if the form was cancelled or reopened before
the remote call settled, the result is stale.  A stale success is
still applied to the store, since the service has committed it, but
it does not close or notify the newer form.
"""

import logging
from datetime import timezone, tzinfo
from enum import Enum
from typing import Any, Dict, Optional

from ..core.dates import display_from_interchange
from ..core.errors import FormStateError, NotFoundError, RemoteServiceError, ValidationError
from ..schemas.person import Person, validate_form
from .notifications import Notifier
from .person_service import RemoteRecordService
from .record_store import RecordStore


logger = logging.getLogger(__name__)

FIELD_NAMES = ("name", "email", "phone_number", "birth_date", "gender")


class FormMode(str, Enum):
    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"


def _blank_fields() -> Dict[str, Any]:
    return {name: None for name in FIELD_NAMES}


class FormController:
    """Two‑mode (create/edit) form bound to a record store."""

    def __init__(
        self,
        service: RemoteRecordService,
        store: RecordStore,
        notifier: Notifier,
        *,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self.service = service
        self.store = store
        self.notifier = notifier
        self.tz = tz
        self.mode = FormMode.CLOSED
        self.target_id: Optional[int] = None
        self.fields: Dict[str, Any] = _blank_fields()
        self.errors: Dict[str, str] = {}
        self.generation = 0
        self._in_flight: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.mode is not FormMode.CLOSED

    @property
    def is_submitting(self) -> bool:
        return self._in_flight is not None and self._in_flight == self.generation

    @property
    def title(self) -> str:
        return "Edit person" if self.mode is FormMode.EDITING else "Create person"

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def open_create(self) -> None:
        self._require_closed()
        self._reset(FormMode.CREATING)
        logger.debug("Form opened for a new person")

    def open_edit(self, person: Person) -> None:
        self._require_closed()
        self._reset(FormMode.EDITING, target_id=person.id)
        self.fields.update(
            name=person.name,
            email=person.email,
            phone_number=person.phone_number,
            birth_date=display_from_interchange(person.birth_date, self.tz),
            gender=person.gender,
        )
        logger.debug("Form opened on person %s", person.id)

    def cancel(self) -> None:
        if self.is_submitting:
            logger.info("Form closed while a submit is in flight; its result will be ignored")
        self._reset(FormMode.CLOSED)

    def set_field(self, name: str, value: Any) -> None:
        if not self.is_open:
            raise FormStateError("The form is not open")
        if name not in self.fields:
            raise KeyError(f"Unknown form field {name!r}")
        self.fields[name] = value
        self.errors.pop(name, None)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    async def submit(self) -> Optional[Person]:
        """Validate and send the form.

        Returns the stored record on success and ``None`` when
        validation or the remote call failed, or when the form was
        closed or reopened before the call settled.
        """
        if not self.is_open:
            raise FormStateError("Cannot submit a closed form")
        if self.is_submitting:
            logger.info("Submit ignored: a previous submit is still in flight")
            return None

        try:
            form = validate_form(self.fields)
        except ValidationError as exc:
            self.errors = exc.errors
            logger.debug("Form validation failed: %s", exc.errors)
            return None
        self.errors = {}

        payload = form.to_payload(self.tz)
        generation = self.generation
        mode, target_id = self.mode, self.target_id
        self._in_flight = generation
        try:
            if mode is FormMode.CREATING:
                person = await self.service.create(payload)
            else:
                person = await self.service.update(target_id, payload)
        except RemoteServiceError as exc:
            if generation != self.generation:
                logger.warning("Ignoring failure of a stale submit: %s", exc)
                return None
            logger.error("Submit failed: %s", exc)
            self.notifier.error(
                "Error adding person" if mode is FormMode.CREATING else "Error updating person"
            )
            return None
        finally:
            if self._in_flight == generation:
                self._in_flight = None

        self._apply(mode, target_id, person)
        if generation != self.generation:
            logger.info("Person %s saved after the form was closed", person.id)
            return None
        self.notifier.success(
            "Person added successfully" if mode is FormMode.CREATING else "Person updated successfully"
        )
        self._reset(FormMode.CLOSED)
        return person

    def _apply(self, mode: FormMode, target_id: Optional[int], person: Person) -> None:
        if mode is FormMode.CREATING:
            if person.id in self.store:
                # A reload picked the new record up while the create was in flight.
                logger.info("Created person %s was already loaded; replacing it", person.id)
                self.store.update(person.id, person)
            else:
                self.store.add(person)
            return
        try:
            self.store.update(target_id, person)
        except NotFoundError:
            # Deleted locally while the update was in flight.
            logger.error("Updated person %s is no longer in the store", target_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _require_closed(self) -> None:
        if self.is_open:
            raise FormStateError(f"The form is already open ({self.mode.value})")

    def _reset(self, mode: FormMode, target_id: Optional[int] = None) -> None:
        self.mode = mode
        self.target_id = target_id
        self.fields = _blank_fields()
        self.errors = {}
        self.generation += 1
