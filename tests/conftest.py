import asyncio
from typing import Dict, List, Optional

import pytest

from person_registry.app.core.errors import RemoteServiceError
from person_registry.app.schemas.person import Person, PersonPayload
from person_registry.app.services.notifications import Notifier
from person_registry.app.services.record_store import RecordStore
from person_registry.app.services.screen_controller import ScreenController


def build_person(person_id: int, name: str = "Ana", email: str = "ana@x.com", **overrides) -> Person:
    data = {
        "id": person_id,
        "name": name,
        "email": email,
        "gender": "Female",
        "birth_date": "1990-03-15T00:00:00.000Z",
        "phone_number": "(11) 99999-8888",
    }
    data.update(overrides)
    return Person(**data)


class FakePersonService:
    """In‑memory RemoteRecordService with failure injection.

    Operations named in ``fail`` raise ``RemoteServiceError``.  When
    ``gate`` is set, every call waits for it before settling.
    """

    def __init__(self, people=()) -> None:
        self.people: Dict[int, Person] = {person.id: person for person in people}
        self.next_id = max(self.people, default=0) + 1
        self.calls: List[str] = []
        self.payloads: List[PersonPayload] = []
        self.fail = set()
        self.gate: Optional[asyncio.Event] = None
        # Commit creates before waiting on the gate instead of after.
        self.gate_after_commit = False

    async def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if self.gate is not None:
            await self.gate.wait()
        if operation in self.fail:
            raise RemoteServiceError(f"Error {operation}: service unavailable", status_code=503)

    async def list(self) -> List[Person]:
        await self._enter("list")
        return list(self.people.values())

    async def create(self, payload: PersonPayload) -> Person:
        if self.gate_after_commit:
            self.calls.append("create")
            person = self._commit(payload)
            await self.gate.wait()
            return person
        await self._enter("create")
        return self._commit(payload)

    def _commit(self, payload: PersonPayload) -> Person:
        self.payloads.append(payload)
        person = Person(id=self.next_id, **payload.model_dump())
        self.next_id += 1
        self.people[person.id] = person
        return person

    async def update(self, person_id: int, payload: PersonPayload) -> Person:
        await self._enter("update")
        self.payloads.append(payload)
        if person_id not in self.people:
            raise RemoteServiceError("Person not found", status_code=404)
        person = Person(id=person_id, **payload.model_dump())
        self.people[person_id] = person
        return person

    async def delete(self, person_id: int) -> None:
        await self._enter("delete")
        if self.people.pop(person_id, None) is None:
            raise RemoteServiceError("Person not found", status_code=404)


@pytest.fixture
def make_person():
    return build_person


@pytest.fixture
def ana():
    return build_person(1)


@pytest.fixture
def people():
    return [
        build_person(1),
        build_person(2, name="Bruno Lima", email="bruno@example.com", gender="Male"),
        build_person(3, name="Carla Dias", email="carla.ANA@example.com"),
        build_person(4, name="Diego", email="diego@example.com", gender="Male"),
    ]


@pytest.fixture
def fake_service_cls():
    return FakePersonService


@pytest.fixture
def service(ana):
    return FakePersonService([ana])


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def screen(service, notifier):
    return ScreenController(service, notifier=notifier)


@pytest.fixture
def valid_fields():
    return {
        "name": "Bruno Lima",
        "email": "bruno@x.com",
        "phone_number": "(21) 98888-7777",
        "birth_date": "15-03-1990",
        "gender": "Male",
    }
