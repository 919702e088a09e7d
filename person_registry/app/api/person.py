"""
Person endpoints.

CRUD over the in‑memory person collection with the same shapes as the
production service: ``birthDate`` and ``phoneNumber`` use camelCase on
the wire and ``DELETE`` answers with an empty body.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from person_registry.app.schemas.person import Person, PersonPayload
from person_registry.app.services.person_repository import PersonRepository, get_repository

router = APIRouter()


@router.get("", response_model=List[Person])
async def list_people(repo: PersonRepository = Depends(get_repository)) -> List[Person]:
    """Return every person in creation order."""
    return await repo.list_people()


@router.post("", response_model=Person, status_code=status.HTTP_201_CREATED)
async def create_person(
    person_in: PersonPayload,
    repo: PersonRepository = Depends(get_repository),
) -> Person:
    return await repo.create_person(person_in)


@router.put("/{person_id}", response_model=Person)
async def update_person(
    person_id: int,
    person_in: PersonPayload,
    repo: PersonRepository = Depends(get_repository),
) -> Person:
    """Replace a person's fields.  Returns HTTP 404 for unknown ids."""
    person = await repo.update_person(person_id, person_in)
    if person is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Person not found")
    return person


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_person(
    person_id: int,
    repo: PersonRepository = Depends(get_repository),
) -> Response:
    if not await repo.delete_person(person_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Person not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
