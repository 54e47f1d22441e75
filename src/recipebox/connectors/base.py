"""Shared types for calls to external HTTP APIs."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ConnectorResponse:
    """Decoded JSON body of an external API response."""

    data: Any
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def request_id(self) -> str | None:
        """Provider-side request ID, quoted when reporting upstream problems."""
        return self.headers.get("x-request-id")


class ConnectorError(Exception):
    """An external API call failed or returned data we cannot use."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response

    @property
    def is_client_error(self) -> bool:
        """The provider rejected the request itself (bad key, bad payload)."""
        return self.status_code is not None and 400 <= self.status_code < 500


class ConnectorNotConfiguredError(ConnectorError):
    """Raised when a connector is used without the setting it needs."""

    def __init__(self, setting: str):
        super().__init__(f"{setting} is not configured")
        self.setting = setting
