"""Person collection API client.

This module defines a small client around the REST endpoints that
persist person records:

* :meth:`PersonAPI.list_people` – ``GET /person``
* :meth:`PersonAPI.create_person` – ``POST /person``
* :meth:`PersonAPI.update_person` – ``PUT /person/{id}``
* :meth:`PersonAPI.delete_person` – ``DELETE /person/{id}``

The client uses the ``requests`` library and is blocking.  Every method
returns a tuple ``(data, error)``: on success ``error`` is ``None``; on
failure ``data`` is empty and ``error`` is a dictionary with the keys
``status_code`` and ``message``.  Nothing is raised for HTTP or network
failures, callers decide how to surface them (see
:class:`person_registry.app.services.person_service.PersonService`).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]


class PersonAPI:
    """Client for the remote ``/person`` collection."""

    collection_path = "/person"

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3333``.
            timeout: Per request timeout in seconds.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def close(self) -> None:
        self.session.close()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/person``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  ``data`` is the parsed JSON body,
            or ``None`` when the response has no content.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    if isinstance(err_json, dict):
                        message = str(err_json.get("detail") or err_json.get("message") or err_json)
                    else:
                        message = str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("%s %s failed (%s): %s", method, path, status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            return None, {"status_code": None, "message": str(exc)}

    def _item_path(self, person_id: Any) -> str:
        return f"{self.collection_path}/{person_id}"

    # ------------------------------------------------------------------
    # Person operations
    # ------------------------------------------------------------------
    def list_people(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve every person record.

        Returns:
            A tuple ``(people, error)``.  ``people`` is empty on failure.
        """
        data, error = self._request("GET", self.collection_path)
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        # Some deployments wrap the list inside a dictionary.
        if isinstance(data, dict):
            for key in ["people", "data", "items"]:
                if key in data and isinstance(data[key], list):
                    return data[key], None
        if data is None:
            return [], None
        return [], {"status_code": None, "message": "Unexpected response listing people"}

    def create_person(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Create a person.

        Args:
            payload: Request body with wire field names.
        Returns:
            A tuple ``(person, error)`` where ``person`` includes the
            server assigned ``id``.
        """
        data, error = self._request("POST", self.collection_path, json_body=payload)
        if error:
            return None, error
        return self._expect_record(data, "creating a person")

    def update_person(
        self, person_id: Any, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Replace the fields of an existing person.

        Args:
            person_id: Identifier of the person.
            payload: Request body with wire field names.
        Returns:
            A tuple ``(person, error)``.
        """
        data, error = self._request("PUT", self._item_path(person_id), json_body=payload)
        if error:
            return None, error
        return self._expect_record(data, f"updating person {person_id}")

    def delete_person(self, person_id: Any) -> Tuple[bool, Optional[ApiError]]:
        """Delete a person.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", self._item_path(person_id))
        if error:
            return False, error
        return True, None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _expect_record(data: Any, action: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        if isinstance(data, dict):
            return data, None
        logger.error("Unexpected response when %s: %r", action, data)
        return None, {"status_code": None, "message": f"Unexpected response when {action}"}
