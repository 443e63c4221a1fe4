"""Small HTTP client used for the authentication and session services."""

from __future__ import annotations

import http.client
import json
import re
import ssl
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from .tokenizer import Tokenizer

Headers = dict[str, str]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class HTTPResponse:
    status: int = 0
    headers: Headers = field(default_factory=dict)
    body: str = ""


def parse_status(header: str) -> int:
    """Read the status code from a raw response header block, or 0."""
    first = header.find(" ")
    if first < 0:
        return 0
    second = header.find(" ", first + 1)
    if second < 0:
        return 0
    match = _LEADING_INT.match(header[first + 1:second + 1])
    return int(match.group(1)) if match else 0


def parse_headers(header: str) -> Headers:
    """Turn a raw response header block into a name to value mapping.

    The status line is dropped; each value keeps the text after the first
    colon with its final character (the carriage return) removed.
    """
    end_first = header.find("\n")
    if end_first >= 0:
        header = header[end_first + 1:]

    lines = Tokenizer(header)
    lines("\n")

    headers: Headers = {}
    for line in lines:
        pair = Tokenizer(line)
        pair(":", 2)
        if len(pair) != 2 or not pair[0] or not pair[1]:
            continue
        headers[pair[0]] = pair[1][:-1]
    return headers


def _json_body(data: Any) -> str:
    if isinstance(data, str):
        return data
    return json.dumps(data, separators=(",", ":"))


class HTTPClient(ABC):
    """Interface for the requests the services need."""

    @abstractmethod
    def get(self, url: str, headers: Headers | None = None) -> HTTPResponse:
        ...

    @abstractmethod
    def post(self, url: str, data: str, headers: Headers | None = None) -> HTTPResponse:
        ...

    @abstractmethod
    def post_json(self, url: str, data: Any, headers: Headers | None = None) -> HTTPResponse:
        """Post ``data`` as JSON; a string is sent as is, anything else is encoded."""


class UrllibHTTPClient(HTTPClient):
    """HTTP client built on urllib. Certificates are not verified.

    A failed connection yields a response with status 0 and no body.
    """

    def __init__(self, timeout: int = 12000) -> None:
        self.timeout = timeout
        self._context = ssl.create_default_context()
        self._context.check_hostname = False
        self._context.verify_mode = ssl.CERT_NONE

    def get(self, url: str, headers: Headers | None = None) -> HTTPResponse:
        return self._request(url, "", headers)

    def post(self, url: str, data: str, headers: Headers | None = None) -> HTTPResponse:
        return self._request(url, data, headers)

    def post_json(self, url: str, data: Any, headers: Headers | None = None) -> HTTPResponse:
        merged = dict(headers or {})
        merged["Content-Type"] = "application/json"
        return self._request(url, _json_body(data), merged)

    def _request(self, url: str, data: str, headers: Headers | None) -> HTTPResponse:
        payload = data.encode("utf-8") if data else None
        try:
            request = urllib.request.Request(
                url,
                data=payload,
                headers=dict(headers or {}),
                method="POST" if payload is not None else "GET",
            )
            with urllib.request.urlopen(
                request, timeout=self.timeout / 1000, context=self._context
            ) as reply:
                return self._build(reply.status, reply.headers, reply.read())
        except urllib.error.HTTPError as error:
            with error:
                return self._build(error.code, error.headers, error.read())
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError):
            return HTTPResponse()

    @staticmethod
    def _build(status: int, message: Any, body: bytes) -> HTTPResponse:
        headers = {name: value for name, value in message.items()} if message else {}
        return HTTPResponse(
            status=status,
            headers=headers,
            body=body.decode("utf-8", errors="replace"),
        )