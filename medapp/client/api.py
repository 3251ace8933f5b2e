"""
HTTP client for the MedApp API.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from ..config import get_settings

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Something went wrong! Please try again."


class NetworkError(Exception):
    """Raised when the HTTP call itself fails (connection refused, timeout, ...)."""

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


class ApiError(Exception):
    """Raised when the backend answers with an error status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class MedAppClient:
    """
    Thin wrapper around httpx for the three registration endpoints.

    Args:
        base_url: Backend base URL, API_BASE_URL from the settings when omitted
        http_client: Pre-built httpx client (a TestClient works too); when given,
            base_url is ignored and the caller owns the client
        timeout: Request timeout in seconds, httpx's default when omitted
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ):
        if http_client is not None:
            self._http = http_client
            self._owns_client = False
        else:
            base_url = base_url or get_settings().api_base_url
            kwargs = {"timeout": timeout} if timeout is not None else {}
            self._http = httpx.Client(base_url=base_url, **kwargs)
            self._owns_client = True

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "MedAppClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def create_user(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST /api/users with first_name, last_name, email and password."""
        return self._post("/api/users", payload)

    def create_doctor(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST /api/doctors with user_id and doctor fields."""
        return self._post("/api/doctors", payload)

    def create_patient(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST /api/patients with user_id and patient fields."""
        return self._post("/api/patients", payload)

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._http.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Error calling {path}: {str(e)}")
            raise NetworkError() from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error:
            message = body.get("message") or DEFAULT_ERROR_MESSAGE
            logger.warning(f"{path} returned {response.status_code}: {message}")
            raise ApiError(response.status_code, message)
        return body
