"""Shared HTTP type definitions to avoid circular imports."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from strict_http.domain.errors import InvalidMethod


class Method(str, Enum):
    """Request methods the server accepts."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"
    PUT = "PUT"

    @classmethod
    def parse(cls, token: str) -> "Method":
        """Match a method token case-insensitively."""
        try:
            return cls(token.upper())
        except ValueError as exc:
            raise InvalidMethod(token) from exc


@dataclass(frozen=True)
class HttpRequest:
    """Represents a parsed and validated HTTP request."""

    method: Method
    path: str
    version: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Look up a header by name, ignoring case."""
        return self.headers.get(name.lower(), default)


@dataclass
class HttpResponse:
    """Represents an HTTP response to be sent to a client."""

    status_line: str
    headers: dict[str, str]
    body: bytes
