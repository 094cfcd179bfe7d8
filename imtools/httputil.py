"""A small JSON-oriented HTTP client."""

from __future__ import annotations

import http.client
import threading
import urllib.error
import urllib.request
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Mapping
from urllib.parse import urlsplit

from imtools.jsonutil import json_marshal, json_unmarshal

__all__ = ["ClientConfig", "HTTPClientError", "HTTPClient"]

_JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class HTTPClientError(Exception):
    """Raised when a request cannot be sent or its response cannot be read."""


@dataclass
class ClientConfig:
    """Client settings: request timeout in seconds and a per-host connection limit.

    A timeout or limit of zero means no limit.
    """

    timeout: float = 15.0
    max_conns_per_host: int = 100


class HTTPClient:
    """Sends GET requests and JSON POST requests, returning the raw response body."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        opener: urllib.request.OpenerDirector | None = None,
    ) -> None:
        self.config = config if config is not None else ClientConfig()
        self._opener = opener if opener is not None else urllib.request.build_opener()
        self._slots: dict[str, threading.BoundedSemaphore] = {}
        self._slots_lock = threading.Lock()

    @contextmanager
    def _host_slot(self, url: str) -> Iterator[None]:
        limit = self.config.max_conns_per_host
        if limit <= 0:
            yield
            return
        host = urlsplit(url).netloc
        with self._slots_lock:
            slot = self._slots.setdefault(host, threading.BoundedSemaphore(limit))
        with slot:
            yield

    def _timeout(self, override: float = 0) -> float | None:
        limits = [value for value in (self.config.timeout, override) if value and value > 0]
        return min(limits) if limits else None

    def _send(self, request: urllib.request.Request, timeout: float | None, context: str) -> bytes:
        url = request.full_url
        with self._host_slot(url):
            try:
                response = self._opener.open(request, timeout=timeout)
            except urllib.error.HTTPError as exc:
                response = exc
            except (urllib.error.URLError, OSError, ValueError, http.client.HTTPException) as exc:
                raise HTTPClientError(f"{context}: {exc} (url={url})") from exc
            try:
                with response:
                    return response.read()
            except (OSError, http.client.HTTPException) as exc:
                raise HTTPClientError(f"failed to read response body: {exc} (url={url})") from exc

    def get(self, url: str) -> bytes:
        """Perform a GET request and return the response body, whatever its status."""
        request = urllib.request.Request(url, method="GET")
        return self._send(request, self._timeout(), "GET request failed")

    def post(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        data: Any = None,
        timeout: float = 0,
    ) -> bytes:
        """POST ``data`` encoded as JSON and return the response body.

        A positive ``timeout`` (seconds) shortens the configured one.
        """
        body = b""
        if data is not None:
            try:
                body = json_marshal(data) + b"\n"
            except (TypeError, ValueError) as exc:
                raise HTTPClientError(f"JSON encode failed: {exc}") from exc
        request = urllib.request.Request(url, data=body, method="POST")
        for key, value in (headers or {}).items():
            request.add_header(key, value)
        request.add_header("Content-Type", _JSON_CONTENT_TYPE)
        return self._send(request, self._timeout(timeout), "HTTP request failed")

    def post_return(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        data: Any = None,
        timeout: float = 0,
    ) -> Any:
        """POST ``data`` as JSON and return the decoded JSON response."""
        response = self.post(url, headers, data, timeout)
        try:
            return json_unmarshal(response)
        except (ValueError, UnicodeDecodeError) as exc:
            raise HTTPClientError(f"JSON unmarshal failed: {exc}") from exc