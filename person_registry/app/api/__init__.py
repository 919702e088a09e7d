"""
Routes of the development API.

Only the ``/person`` collection is exposed; see ``person.py``.
"""

from fastapi import APIRouter

from . import person

router = APIRouter()

router.include_router(person.router, prefix="/person", tags=["person"])
