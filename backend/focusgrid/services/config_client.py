from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import httpx
from pydantic import ValidationError
from tenacity import RetryCallState, Retrying, retry_if_exception_type, stop_after_attempt, wait_fixed

from focusgrid.core.config import settings
from focusgrid.core.logging_setup import logger
from focusgrid.schemas.config import ClientConfig
from focusgrid.services.fallback import (
    SUBDOMAIN_CLIENT_IDS,
    get_default_fallback_config,
    get_fallback_config,
)


class ConfigClientError(RuntimeError):
    """Raised when the config API cannot be reached or answers with an error."""

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.status_code = status_code

    @property
    def is_upstream(self) -> bool:
        """Transport failures and 5xx answers; these are the ones worth falling back on."""
        return self.status_code is None or self.status_code >= 500


@dataclass
class ConfigResult:
    config: ClientConfig | None
    error: str | None = None
    degraded: bool = False


def is_feature_enabled(result: ConfigResult, feature_name: str) -> bool:
    # Unknown until loaded: render rather than flicker.
    if result.config is None:
        return True
    return result.config.features.get(feature_name, True)


def enabled_features(result: ConfigResult) -> list[str]:
    if result.config is None:
        return []
    return [name for name, enabled in result.config.features.items() if enabled]


class ConfigClient:
    """HTTP client for ``GET /api/config`` with timeout, bounded retries and fallback configs."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout_seconds: float | None = None,
        retries: int | None = None,
        retry_delay_seconds: float | None = None,
        http_client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if base_url is None:
            base_url = "" if http_client is not None else settings.config_api_url
        self._base_url = (base_url or "").rstrip("/")
        if timeout_seconds is None:
            timeout_seconds = settings.config_timeout_seconds
        self._timeout = timeout_seconds
        self._retries = max(0, settings.config_retries if retries is None else retries)
        if retry_delay_seconds is None:
            retry_delay_seconds = settings.config_retry_delay_seconds
        self._retry_delay = retry_delay_seconds
        # A caller-supplied client keeps its own timeout settings.
        self._http = http_client or httpx.Client(timeout=self._timeout, transport=transport)
        self._sleep = sleep

    def resolve_client_id(
        self,
        query_client_id: str | None = None,
        host: str | None = None,
        default: str | None = None,
    ) -> str | None:
        """Query param, then tenant subdomain, then the caller's default, then ``CLIENT_ID``."""
        for candidate in (query_client_id, self._client_id_from_host(host), default, settings.resolved_client_id()):
            value = (candidate or "").strip()
            if value:
                return value
        return None

    @staticmethod
    def _client_id_from_host(host: str | None) -> str | None:
        hostname = (host or "").split(":")[0].strip().lower()
        suffix = f".{settings.tenant_domain.lower()}"
        if not hostname.endswith(suffix) or hostname.startswith("www."):
            return None
        subdomain = hostname[: -len(suffix)].split(".")[0]
        return SUBDOMAIN_CLIENT_IDS.get(subdomain)

    def _request(self, method: str, path: str, *, params: dict[str, Any] | None = None) -> httpx.Response:
        url = f"{self._base_url}{path}"
        attempts = self._retries + 1

        def log_retry(retry_state: RetryCallState) -> None:
            exc = retry_state.outcome.exception()
            kind = "Request timeout" if isinstance(exc, httpx.TimeoutException) else "Network error"
            logger.warning("%s for %s (attempt %s/%s): %s", kind, url, retry_state.attempt_number, attempts, exc)

        retrying = Retrying(
            stop=stop_after_attempt(attempts),
            wait=wait_fixed(self._retry_delay),
            retry=retry_if_exception_type(httpx.TransportError),
            sleep=self._sleep,
            before_sleep=log_retry,
            reraise=True,
        )
        try:
            return retrying(self._http.request, method, url, params=params)
        except httpx.RequestError as exc:
            raise ConfigClientError(f"Failed to reach config API: {exc}") from exc

    def fetch_config(self, client_id: str | None) -> ClientConfig:
        params = {"clientId": client_id} if client_id else None
        response = self._request("GET", f"{settings.api_prefix}/config", params=params)

        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = {"error": response.text}
            if not isinstance(payload, dict):
                payload = {"error": str(payload)}
            if response.status_code == 404:
                raise ConfigClientError("Client not found", details=payload, status_code=404)
            message = str(payload.get("details") or payload.get("error") or "Config API error")
            raise ConfigClientError(
                f"HTTP {response.status_code}: {message}",
                details=payload,
                status_code=response.status_code,
            )

        try:
            return ClientConfig.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ConfigClientError(f"Invalid config payload: {exc}") from exc

    def load_config(
        self,
        client_id: str | None = None,
        *,
        host: str | None = None,
        default: str | None = None,
    ) -> ConfigResult:
        target = self.resolve_client_id(client_id, host=host, default=default)
        try:
            return ConfigResult(config=self.fetch_config(target))
        except ConfigClientError as exc:
            error = str(exc)
            logger.error("Error loading client config for %s: %s", target, error)
            if not exc.is_upstream:
                return ConfigResult(config=None, error=error)

        fallback = get_fallback_config(target) if target else get_default_fallback_config()
        if fallback is None:
            return ConfigResult(config=None, error=error)

        logger.warning("Using fallback configuration for client: %s", fallback.client_id)
        return ConfigResult(config=fallback, error=f"{error} (using fallback)", degraded=True)
