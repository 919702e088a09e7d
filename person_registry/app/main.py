"""
Entrypoint for the development API.

This module assembles a FastAPI application serving the ``/person``
collection from memory, so the screen can be exercised without the
production service::

    uvicorn person_registry.app.main:app --port 3333

``run.py --serve`` does the same with the host and port from
``Settings``.
"""

from fastapi import FastAPI

from .api import router as person_router
from .core.config import settings
from .core.logging_config import setup_logging


def create_app() -> FastAPI:
    """Create and configure the development API.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=f"{settings.project_name} development API", version=settings.api_version)
    app.include_router(person_router)
    return app


# Created at import time so uvicorn can discover it.
app = create_app()
