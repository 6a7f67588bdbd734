from __future__ import annotations

from typing import Any


class FocusGridError(RuntimeError):
    """Base domain error; carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, *, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationFailedError(FocusGridError):
    status_code = 400


class ClientIdRequiredError(ValidationFailedError):
    def __init__(self) -> None:
        super().__init__("Client ID is required")


class InvalidFeatureError(ValidationFailedError):
    def __init__(self, message: str, valid_features: list[str]) -> None:
        super().__init__(message, details={"validFeatures": valid_features})


class ClientNotFoundError(FocusGridError):
    status_code = 404

    def __init__(self, client_id: str | None = None) -> None:
        super().__init__("Client not found")
        self.client_id = client_id


class ConflictError(FocusGridError):
    status_code = 409


class UpstreamError(FocusGridError):
    """Database (or other backing service) failure, distinct from not-found."""

    status_code = 500

    def __init__(self, details: str) -> None:
        super().__init__("Internal server error", details=details)
