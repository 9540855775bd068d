"""Fetch the Go release catalog from go.dev."""

from __future__ import annotations

import json
import logging
from typing import Any

import requests
from requests.exceptions import RequestException

from .catalog import Catalog
from .errors import NetworkError, ParseError
from .types import releases_from_payload

logger = logging.getLogger(__name__)


def http_get(
    url: str,
    *,
    timeout_seconds: float,
    session: requests.Session | None = None,
    stream: bool = False,
) -> requests.Response:
    """GET ``url`` and return the response, raising ``NetworkError`` on failure."""
    getter = session.get if session is not None else requests.get
    try:
        response = getter(url, timeout=timeout_seconds, stream=stream)
    except RequestException as exc:
        raise NetworkError(f"request to {url} failed: {exc}") from exc
    if response.status_code >= 400:
        status = response.status_code
        close_response(response)
        raise NetworkError(f"request to {url} failed with status={status}")
    return response


def close_response(response: requests.Response) -> None:
    try:
        response.close()
    except Exception as exc:
        logger.warning("failed to release http response url=%s: %s", getattr(response, "url", ""), exc)


def _decode_body(body: bytes, url: str) -> Any:
    try:
        return json.loads(body)
    except ValueError as exc:
        raise ParseError(f"catalog at {url} is not valid JSON: {exc}") from exc


def fetch_catalog(
    url: str,
    *,
    timeout_seconds: float = 5.0,
    session: requests.Session | None = None,
) -> Catalog:
    logger.debug("go catalog fetch url=%s timeout=%s", url, timeout_seconds)
    response = http_get(url, timeout_seconds=timeout_seconds, session=session)
    try:
        body = response.content
    except RequestException as exc:
        raise NetworkError(f"reading catalog from {url} failed: {exc}") from exc
    finally:
        close_response(response)

    catalog = Catalog.from_releases(releases_from_payload(_decode_body(body, url)))
    logger.debug(
        "go catalog loaded releases=%s release_candidate=%s",
        len(catalog),
        catalog.release_candidate,
    )
    return catalog
