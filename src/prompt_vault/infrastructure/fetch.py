"""HTTP retrieval of published CSV exports."""

from __future__ import annotations

import logging

import httpx

from prompt_vault.infrastructure.observability.logger import NullLogger, VaultLogger
from prompt_vault.models.errors import FetchError

_REQUEST_HEADERS = {
    "Accept": "text/csv, text/plain;q=0.9, */*;q=0.1",
    "Cache-Control": "no-store",
    "User-Agent": "prompt-vault",
}


def fetch_csv(
    url: str,
    *,
    client: httpx.Client | None = None,
    timeout: float | None = None,
    logger: VaultLogger | None = None,
) -> str:
    """GET ``url`` and return the body text.

    Any non-2xx status or transport error becomes a single :class:`FetchError`.
    """

    logger = logger or NullLogger()
    target = (url or "").strip()
    if not target:
        raise FetchError()

    logger.event("fetch.started", message="Fetching CSV", data={"url": target})

    if client is not None:
        return _fetch_with_client(client, target, logger)

    client_kwargs: dict = {"follow_redirects": True}
    if timeout is not None:
        client_kwargs["timeout"] = timeout
    with httpx.Client(**client_kwargs) as local_client:
        return _fetch_with_client(local_client, target, logger)


def _fetch_with_client(client: httpx.Client, url: str, logger: VaultLogger) -> str:
    try:
        response = client.get(url, headers=_REQUEST_HEADERS)
    except httpx.HTTPError as exc:
        _log_failure(logger, url, reason=str(exc) or type(exc).__name__)
        raise FetchError() from exc
    # InvalidURL is not an HTTPError subclass.
    except httpx.InvalidURL as exc:
        _log_failure(logger, url, reason=str(exc))
        raise FetchError() from exc

    if not response.is_success:
        _log_failure(logger, url, reason=f"HTTP {response.status_code}", status_code=response.status_code)
        raise FetchError(status_code=response.status_code)

    # Published sheets may prepend a UTF-8 BOM.
    text = response.text.removeprefix("\ufeff")
    logger.event(
        "fetch.completed",
        message="CSV fetched",
        data={"url": url, "status_code": response.status_code, "byte_count": len(response.content)},
    )
    return text


def _log_failure(logger: VaultLogger, url: str, *, reason: str, status_code: int | None = None) -> None:
    logger.event(
        "fetch.failed",
        message="CSV fetch failed",
        level=logging.WARNING,
        data={"url": url, "status_code": status_code, "reason": reason},
    )


__all__ = ["fetch_csv"]
