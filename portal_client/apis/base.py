from __future__ import annotations

import logging
from typing import Any

from portal_client.config import AppSettings
from portal_client.envelope import EMPTY, Empty, Items, is_application_failure, normalize, unwrap_record
from portal_client.errors import PortalApiError, application_error, from_http_error
from portal_client.http import ApiHttpError, HttpClient

logger = logging.getLogger(__name__)

# Optional/report reads answer these statuses with "no data" instead of failing.
OPTIONAL_READ_STATUSES = frozenset({403, 404, 500})


def page_params(
    page: int,
    limit: int,
    status: str | None = None,
    search: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    params: dict[str, Any] = {"page": page, "limit": limit}
    if status and str(status).strip().lower() != "all":
        params["status"] = str(status).strip()
    if search and str(search).strip():
        params["search"] = str(search).strip()
    params.update({key: value for key, value in extra.items() if value is not None})
    return params


class DomainApi:
    # Read `<field>Error`-style keys in failure payloads as field errors.
    loose_field_error_keys = False

    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def _call(
        self,
        method: str,
        path: str,
        default_message: str,
        params: dict[str, Any] | None = None,
        payload: Any = None,
    ) -> Any:
        try:
            raw = self._http_client.request_json(method, path, params=params, payload=payload)
        except ApiHttpError as exc:
            error = from_http_error(exc, default_message, self.loose_field_error_keys)
            logger.warning(
                "%s %s failed (status=%s, kind=%s): %s",
                method,
                path,
                exc.status_code,
                error.kind.value,
                error.message,
            )
            raise error from exc

        if is_application_failure(raw):
            error = application_error(raw, default_message, loose_keys=self.loose_field_error_keys)
            logger.warning("%s %s rejected by the backend: %s", method, path, error.message)
            raise error
        return raw

    def _list(
        self,
        path: str,
        default_message: str,
        params: dict[str, Any] | None = None,
        optional: bool = False,
    ) -> Items | Empty:
        try:
            raw = self._call("GET", path, default_message, params=params)
        except PortalApiError as exc:
            if optional and exc.status_code in OPTIONAL_READ_STATUSES:
                logger.info("Optional read %s unavailable (HTTP %s); showing no data", path, exc.status_code)
                return EMPTY
            raise
        return normalize(raw)

    def _record(
        self,
        method: str,
        path: str,
        default_message: str,
        params: dict[str, Any] | None = None,
        payload: Any = None,
    ) -> Any:
        return unwrap_record(self._call(method, path, default_message, params=params, payload=payload))
