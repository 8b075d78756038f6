"""Validating builder for HttpRequest values."""

from typing import Optional

from strict_http.domain.errors import (
    InvalidPath,
    InvalidVersion,
    MissingMethod,
    MissingPath,
    MissingVersion,
)
from strict_http.domain.http_types import HttpRequest, Method
from strict_http.domain.path_grammar import is_valid_path

VERSION_PREFIX = "HTTP/"


class HttpRequestBuilder:
    """Collects raw request parts and validates them in a single build step.

    Setters return the builder so calls can be chained. ``build`` either
    returns a complete :class:`HttpRequest` or raises the first
    :class:`~strict_http.domain.errors.ParseError` it finds, checking the
    method, then the path, then the version. A builder can only be built once.
    """

    def __init__(self) -> None:
        self._method: Optional[str] = None
        self._path: Optional[str] = None
        self._version: Optional[str] = None
        self._headers: dict[str, str] = {}
        self._body: Optional[bytes] = None
        self._consumed = False

    def method(self, method: str) -> "HttpRequestBuilder":
        self._method = method
        return self

    def path(self, path: str) -> "HttpRequestBuilder":
        self._path = path
        return self

    def version(self, version: str) -> "HttpRequestBuilder":
        self._version = version
        return self

    def headers(self, headers: dict[str, str]) -> "HttpRequestBuilder":
        self._headers = headers
        return self

    def body(self, body: Optional[bytes]) -> "HttpRequestBuilder":
        self._body = body
        return self

    def build(self) -> HttpRequest:
        """Validate the collected parts and return the finished request."""
        if self._consumed:
            raise RuntimeError("HttpRequestBuilder.build() called twice")
        self._consumed = True

        if self._method is None:
            raise MissingMethod
        method = Method.parse(self._method)

        if self._path is None:
            raise MissingPath
        if not is_valid_path(self._path):
            raise InvalidPath(self._path)

        if self._version is None:
            raise MissingVersion
        if not self._version.startswith(VERSION_PREFIX):
            raise InvalidVersion(self._version)

        return HttpRequest(
            method=method,
            path=self._path,
            version=self._version,
            headers=self._headers,
            body=self._body,
        )
