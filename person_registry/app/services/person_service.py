"""
Asynchronous access to the remote person collection.

``RemoteRecordService`` is the capability the controllers depend on.
``PersonService`` implements it on top of the blocking
:class:`person_registry.person_api.PersonAPI`: each call runs in a
worker thread through ``asyncio.to_thread`` so the event loop keeps
processing user actions while a request is in flight.  Error tuples
from the client become ``RemoteServiceError`` and response bodies are
parsed into ``Person`` models.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol

from pydantic import ValidationError as PydanticValidationError

from ...person_api import PersonAPI
from ..core.config import Settings, settings as default_settings
from ..core.errors import RemoteServiceError
from ..schemas.person import Person, PersonPayload


logger = logging.getLogger(__name__)


class RemoteRecordService(Protocol):
    """List/create/update/delete over the remote person collection."""

    async def list(self) -> List[Person]:
        ...

    async def create(self, payload: PersonPayload) -> Person:
        ...

    async def update(self, person_id: int, payload: PersonPayload) -> Person:
        ...

    async def delete(self, person_id: int) -> None:
        ...


def _raise_for_error(error: Optional[Dict[str, Any]], action: str) -> None:
    if error:
        raise RemoteServiceError(
            f"Error {action}: {error.get('message') or 'unknown error'}",
            status_code=error.get("status_code"),
        )


def _parse_person(data: Any, action: str) -> Person:
    try:
        return Person.model_validate(data)
    except PydanticValidationError as exc:
        logger.error("Malformed person received when %s: %s", action, exc)
        raise RemoteServiceError(f"Malformed person received when {action}") from exc


class PersonService:
    """``RemoteRecordService`` backed by :class:`PersonAPI`."""

    def __init__(self, api: PersonAPI) -> None:
        self.api = api

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "PersonService":
        config = config or default_settings
        return cls(PersonAPI(base_url=config.api_base_url, timeout=config.request_timeout))

    async def list(self) -> List[Person]:
        people, error = await asyncio.to_thread(self.api.list_people)
        _raise_for_error(error, "loading people")
        return [_parse_person(item, "loading people") for item in people]

    async def create(self, payload: PersonPayload) -> Person:
        data, error = await asyncio.to_thread(self.api.create_person, payload.to_wire())
        _raise_for_error(error, "adding person")
        return _parse_person(data, "adding person")

    async def update(self, person_id: int, payload: PersonPayload) -> Person:
        data, error = await asyncio.to_thread(self.api.update_person, person_id, payload.to_wire())
        _raise_for_error(error, "updating person")
        return _parse_person(data, "updating person")

    async def delete(self, person_id: int) -> None:
        _, error = await asyncio.to_thread(self.api.delete_person, person_id)
        _raise_for_error(error, "deleting person")

    def close(self) -> None:
        self.api.close()
