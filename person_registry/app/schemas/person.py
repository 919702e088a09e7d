"""
Pydantic models for person data.

``PersonPayload`` is the body sent to ``POST /person`` and
``PUT /person/{id}``; ``Person`` adds the server assigned ``id``.  Both
use camelCase aliases on the wire (``birthDate``, ``phoneNumber``) and
accept snake_case names when constructed in Python.

``PersonForm`` holds the values typed into the create/edit form.
``validate_form`` checks them and reports one message per failing
field; it never touches the network.
"""

import re
from datetime import date, tzinfo
from enum import Enum
from typing import Any, Dict, Mapping

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.dates import from_interchange, parse_display_date, to_interchange
from ..core.errors import ValidationError


NAME_PATTERN = re.compile(r"[a-zA-Z\s]+")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"\(\d{2}\) \d{5}-\d{4}")

REQUIRED_MESSAGES = {
    "name": "Please enter the name",
    "email": "Please enter a valid email",
    "phone_number": "Please enter the phone number",
    "birth_date": "Please select a birth date",
    "gender": "Please select a gender",
}


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class PersonPayload(BaseModel):
    """Fields sent to the remote service when creating or updating."""

    name: str = Field(..., examples=["Ana Souza"])
    gender: Gender = Field(..., examples=["Female"])
    birth_date: str = Field(..., alias="birthDate", examples=["1990-03-15T00:00:00.000Z"])
    phone_number: str = Field(..., alias="phoneNumber", examples=["(11) 99999-8888"])
    email: str = Field(..., examples=["ana@example.com"])

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("birth_date")
    @classmethod
    def _check_birth_date(cls, value: str) -> str:
        try:
            from_interchange(value)
        except ValueError:
            raise ValueError(f"birthDate is not an ISO-8601 date: {value!r}") from None
        return value

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON body with wire field names."""
        return self.model_dump(by_alias=True, mode="json", exclude={"id"})


class Person(PersonPayload):
    """A person record as returned by the remote service."""

    id: int


class PersonForm(BaseModel):
    """Validated values of the create/edit form."""

    name: str
    email: str
    phone_number: str
    birth_date: date
    gender: Gender

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(REQUIRED_MESSAGES["name"])
        if not NAME_PATTERN.fullmatch(value):
            raise ValueError("The name may only contain letters and spaces")
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.fullmatch(value.strip()):
            raise ValueError(REQUIRED_MESSAGES["email"])
        return value.strip()

    @field_validator("phone_number")
    @classmethod
    def _check_phone_number(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(REQUIRED_MESSAGES["phone_number"])
        if not PHONE_PATTERN.fullmatch(value):
            raise ValueError("The phone number must look like (11) 99999-8888")
        return value

    @field_validator("birth_date", mode="before")
    @classmethod
    def _parse_birth_date(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(REQUIRED_MESSAGES["birth_date"])
        if isinstance(value, (str, date)):
            try:
                return parse_display_date(value)
            except ValueError:
                raise ValueError("The birth date must be a valid DD-MM-YYYY date") from None
        return value

    def to_payload(self, tz: tzinfo) -> PersonPayload:
        """Build the request body, sending ``birth_date`` as ISO‑8601 UTC."""
        return PersonPayload(
            name=self.name,
            gender=self.gender,
            birth_date=to_interchange(self.birth_date, tz),
            phone_number=self.phone_number,
            email=self.email,
        )


def _field_errors(exc: PydanticValidationError) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error.get("loc") else "form"
        if error["type"] == "value_error":
            message = str(error["ctx"]["error"])
        else:
            # Missing values, wrong types and unknown genders.
            message = REQUIRED_MESSAGES.get(field, error["msg"])
        errors.setdefault(field, message)
    return errors


def validate_form(fields: Mapping[str, Any]) -> PersonForm:
    """Validate raw form values.

    Raises
    ------
    ValidationError
        With one message per failing field.
    """
    try:
        return PersonForm.model_validate(dict(fields))
    except PydanticValidationError as exc:
        raise ValidationError(_field_errors(exc)) from None
