"""Settings, inputs and outputs of the REST invocation activity."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .coerce import to_bool, to_int, to_object, to_params, to_string

ALLOWED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


@dataclass
class RestSettings:
    """How to call a REST service: method, URI, headers, proxy, timeout and TLS."""

    method: str
    uri: str
    headers: dict[str, str] = field(default_factory=dict)
    proxy: str = ""
    timeout: int = 0
    skip_ssl_verify: bool = False
    cert_file: str = ""
    key_file: str = ""
    ca_file: str = ""
    ssl_config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        if not self.method:
            raise ValueError("method is required")
        if self.method not in ALLOWED_METHODS:
            raise ValueError(
                f"method '{self.method}' is not one of {', '.join(ALLOWED_METHODS)}"
            )
        if not self.uri:
            raise ValueError("uri is required")

    @classmethod
    def from_map(cls, values: Mapping[str, Any]) -> RestSettings:
        """Build settings from their map form, coercing each value."""
        return cls(
            method=to_string(values.get("method")),
            uri=to_string(values.get("uri")),
            headers=to_params(values.get("headers")),
            proxy=to_string(values.get("proxy")),
            timeout=to_int(values.get("timeout")),
            skip_ssl_verify=to_bool(values.get("skipSSLVerify")),
            cert_file=to_string(values.get("certFile")),
            key_file=to_string(values.get("keyFile")),
            ca_file=to_string(values.get("CAFile")),
            ssl_config=to_object(values.get("sslConfig")),
        )


@dataclass
class RestInput:
    """Per-call values: path and query parameters, headers and content."""

    path_params: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    content: Any = None

    @classmethod
    def from_map(cls, values: Mapping[str, Any]) -> RestInput:
        return cls(
            path_params=to_params(values.get("pathParams")),
            query_params=to_params(values.get("queryParams")),
            headers=to_params(values.get("headers")),
            content=values.get("content"),
        )

    def to_map(self) -> dict[str, Any]:
        return {
            "pathParams": self.path_params,
            "queryParams": self.query_params,
            "headers": self.headers,
            "content": self.content,
        }


@dataclass
class RestOutput:
    """The HTTP status code and decoded body of a response."""

    status: int = 0
    data: Any = None

    @classmethod
    def from_map(cls, values: Mapping[str, Any]) -> RestOutput:
        return cls(status=to_int(values.get("status")), data=values.get("data"))

    def to_map(self) -> dict[str, Any]:
        return {"status": self.status, "data": self.data}