from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import time
from typing import Any, Callable
from urllib.parse import urlparse

import requests

from portal_client.config import AppSettings
from portal_client.endpoints import LOGIN
from portal_client.session import SessionContext

logger = logging.getLogger(__name__)

MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class ApiHttpError(RuntimeError):
    def __init__(self, status_code: int, message: str, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class ApiTransportError(ApiHttpError):
    """No usable HTTP response was received.

    ``retryable`` is False for failures a second attempt cannot fix, such as a
    redirect loop or an undecodable body.
    """

    def __init__(self, message: str, timed_out: bool = False, retryable: bool = True):
        super().__init__(status_code=0, message=message)
        self.timed_out = timed_out
        self.retryable = retryable


class RequestState(Enum):
    IDLE = "idle"
    SENT = "sent"
    RETRY_SCHEDULED = "retry_scheduled"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class RequestDescriptor:
    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, Any] | None = None
    payload: Any = None
    retry_count: int | None = None
    state: RequestState = RequestState.IDLE


def backoff_delay(attempt: int, base_delay_seconds: float) -> float:
    """Delay before retry number ``attempt`` (1-based): base, 2×base, 4×base..."""
    if attempt < 1:
        raise ValueError("attempt must be 1 or greater")
    return base_delay_seconds * (2 ** (attempt - 1))


def is_retryable(descriptor: RequestDescriptor, error: Exception) -> bool:
    if descriptor.method != "GET":
        return False
    return isinstance(error, ApiTransportError) and error.retryable


class HttpClient:
    def __init__(
        self,
        settings: AppSettings,
        session: SessionContext,
        on_session_expired: Callable[[], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._settings = settings
        self._auth_session = session
        self._on_session_expired = on_session_expired
        self._sleep = sleep
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )

    @property
    def session(self) -> SessionContext:
        return self._auth_session

    def set_session_expired_handler(self, handler: Callable[[], None] | None) -> None:
        self._on_session_expired = handler

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request_json("GET", path, params=params)

    def post_json(self, path: str, payload: Any = None) -> Any:
        return self.request_json("POST", path, payload=payload)

    def put_json(self, path: str, payload: Any = None) -> Any:
        return self.request_json("PUT", path, payload=payload)

    def patch_json(self, path: str, payload: Any = None) -> Any:
        return self.request_json("PATCH", path, payload=payload)

    def delete_json(self, path: str) -> Any:
        return self.request_json("DELETE", path)

    def request_json(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        payload: Any = None,
    ) -> Any:
        descriptor = RequestDescriptor(
            method=method.upper(),
            path=path,
            params=params,
            payload=payload,
        )
        return self.dispatch(descriptor)

    def dispatch(self, descriptor: RequestDescriptor) -> Any:
        """Send ``descriptor``, retrying idempotent reads that got no response.

        The same descriptor is re-sent on every attempt, so ``retry_count``
        survives between attempts and headers are recomputed each time.
        """
        while True:
            self.apply_request_policy(descriptor)
            descriptor.state = RequestState.SENT
            try:
                result = self._send(descriptor)
            except ApiHttpError as error:
                if is_retryable(descriptor, error) and descriptor.retry_count < self._settings.retry_attempts:
                    descriptor.retry_count += 1
                    descriptor.state = RequestState.RETRY_SCHEDULED
                    delay = backoff_delay(descriptor.retry_count, self._settings.retry_base_delay_seconds)
                    logger.info(
                        "Retrying %s %s (attempt %d of %d) in %.0f ms: %s",
                        descriptor.method,
                        descriptor.path,
                        descriptor.retry_count,
                        self._settings.retry_attempts,
                        delay * 1000,
                        error,
                    )
                    self._sleep(delay)
                    continue
                descriptor.state = RequestState.FAILED
                raise
            descriptor.state = RequestState.SUCCEEDED
            return result

    def apply_request_policy(self, descriptor: RequestDescriptor) -> RequestDescriptor:
        headers = descriptor.headers
        for name in ("Authorization", "token", "Cache-Control", "Pragma", "Expires"):
            headers.pop(name, None)

        token = self._auth_session.token
        if token and not self._is_login_path(descriptor.path):
            headers["Authorization"] = f"Bearer {token}"
            headers["token"] = f"{self._settings.token_header_scheme} {token}"

        if descriptor.method in MUTATING_METHODS:
            headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
            headers["Pragma"] = "no-cache"
            headers["Expires"] = "0"
        else:
            headers["Cache-Control"] = (
                f"max-age={self._settings.get_max_age_seconds}, "
                f"stale-while-revalidate={self._settings.get_stale_while_revalidate_seconds}"
            )

        if descriptor.retry_count is None:
            descriptor.retry_count = 0
        return descriptor

    @staticmethod
    def _is_login_path(path: str) -> bool:
        return urlparse(path).path.rstrip("/") == LOGIN

    def _send(self, descriptor: RequestDescriptor) -> Any:
        url = f"{self._settings.base_url}{descriptor.path}"
        try:
            response = self._session.request(
                descriptor.method,
                url,
                headers=dict(descriptor.headers),
                params=descriptor.params,
                json=descriptor.payload,
                timeout=self._settings.timeout_seconds,
            )
        except requests.exceptions.Timeout as exc:
            raise ApiTransportError(f"Request timed out: {descriptor.method} {url}", timed_out=True) from exc
        except requests.exceptions.ConnectionError as exc:
            raise ApiTransportError(f"Connection failed: {descriptor.method} {url}") from exc
        except requests.exceptions.ChunkedEncodingError as exc:
            raise ApiTransportError(f"Connection dropped mid-response: {descriptor.method} {url}") from exc
        except requests.exceptions.RequestException as exc:
            raise ApiTransportError(f"Request failed: {descriptor.method} {url}: {exc}", retryable=False) from exc

        if response.ok:
            return self._decode(response)

        if response.status_code == 401:
            self._handle_unauthorized()

        message = response.text[:500]
        raise ApiHttpError(
            status_code=response.status_code,
            message=f"HTTP {response.status_code}: {message}",
            payload=self._decode(response),
        )

    def _handle_unauthorized(self) -> None:
        if self._auth_session.token is None:
            return
        if not self._auth_session.clear():
            return
        logger.warning("Session rejected by the server; signing out")
        if self._on_session_expired is not None:
            self._on_session_expired()

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return response.text
