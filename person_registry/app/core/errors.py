"""
Error types raised by the person registry.

``ValidationError`` never leaves the form controller, ``RemoteServiceError``
is turned into a user notification by the controllers and
``NotFoundError`` signals an inconsistency between a caller and the
record store.
"""

from typing import Dict, Optional


class PersonRegistryError(Exception):
    """Base class for all registry errors."""


class ValidationError(PersonRegistryError):
    """One or more form fields failed validation.

    ``errors`` maps field names to the message shown next to the field.
    """

    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid fields: {fields}")


class RemoteServiceError(PersonRegistryError):
    """The remote person service failed or answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message if status_code is None else f"{message} (HTTP {status_code})")


class NotFoundError(PersonRegistryError, LookupError):
    """No person with the given id is held by the record store."""

    def __init__(self, person_id: int) -> None:
        self.person_id = person_id
        super().__init__(f"Person {person_id} not found")


class FormStateError(PersonRegistryError):
    """The requested form operation is not allowed in the current state."""
