"""An activity that invokes a REST operation over HTTP."""

from __future__ import annotations

import json
import logging
import re
import ssl
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Mapping
from typing import Any

from .activity import ActivityContext, ActivityError
from .coerce import to_bool, to_string
from .rest_metadata import RestInput, RestOutput, RestSettings

_logger = logging.getLogger(__name__)

_JSON_CONTENT = "application/json; charset=UTF-8"
_TEXT_CONTENT = "text/plain; charset=UTF-8"
_BODY_METHODS = ("POST", "PUT", "PATCH")
_PATH_PARAM = re.compile(r":([^/]+)")
_INPUT_NAMES = ("pathParams", "queryParams", "headers", "content")


def content_type_for(content: Any) -> str:
    """Choose the request content type for ``content``."""
    if isinstance(content, str):
        if not content.startswith(("{", "[")):
            return _TEXT_CONTENT
        return _JSON_CONTENT
    if isinstance(content, (int, float)):
        return _TEXT_CONTENT
    return _JSON_CONTENT


def build_uri(uri: str, values: Mapping[str, str]) -> str:
    """Replace ``:name`` path segments of ``uri`` with ``values``; missing names become empty."""
    host_start = min(uri.find("://") + 3, len(uri))
    path_start = uri.find("/", host_start)
    if path_start < 0:
        path_start = len(uri)
    prefix, path = uri[:path_start], uri[path_start:]
    return prefix + _PATH_PARAM.sub(lambda m: values.get(m.group(1), ""), path)


def _tls_context(config: Mapping[str, Any]) -> ssl.SSLContext:
    skip_verify = to_bool(config.get("skipVerify", True))
    use_system_cert = to_bool(config.get("useSystemCert", True))
    if use_system_cert:
        context = ssl.create_default_context()
    else:
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    ca_file = to_string(config.get("caFile"))
    if ca_file:
        context.load_verify_locations(cafile=ca_file)
    cert_file = to_string(config.get("certFile"))
    if cert_file:
        context.load_cert_chain(cert_file, to_string(config.get("keyFile")) or None)
    if skip_verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


class RestActivity:
    """Calls the configured URI with the inputs and outputs the ``status`` and ``data``."""

    def __init__(self, settings: RestSettings) -> None:
        self.settings = settings
        self.contains_param = "/:" in settings.uri
        self.timeout: float | None = settings.timeout if settings.timeout > 0 else None

        proxies: dict[str, str] = {}
        if settings.proxy:
            try:
                parts = urllib.parse.urlsplit(settings.proxy)
            except ValueError as exc:
                _logger.debug("Error parsing proxy url '%s': %s", settings.proxy, exc)
                raise
            if not parts.scheme:
                raise ValueError(f"invalid proxy url '{settings.proxy}'")
            _logger.debug("Setting proxy server: %s", settings.proxy)
            proxies = {"http": settings.proxy, "https": settings.proxy}

        handlers: list[urllib.request.BaseHandler] = [urllib.request.ProxyHandler(proxies)]
        if settings.uri.startswith("https"):
            handlers.append(urllib.request.HTTPSHandler(context=_tls_context(settings.ssl_config)))
        self._opener = urllib.request.build_opener(*handlers)

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> RestActivity:
        """Build the activity from its settings map."""
        return cls(RestSettings.from_map(settings))

    def _target(self, given: RestInput) -> str:
        uri = self.settings.uri
        if self.contains_param:
            if not given.path_params:
                raise ActivityError(
                    "Path Params not specified, required for URI: " + uri, "", None
                )
            uri = build_uri(uri, given.path_params)
        if given.query_params:
            uri += "?" + urllib.parse.urlencode(sorted(given.query_params.items()))
        return uri

    def _body(self, method: str, content: Any) -> tuple[bytes | None, str]:
        if method not in _BODY_METHODS or content is None:
            return None, _JSON_CONTENT
        content_type = content_type_for(content)
        if isinstance(content, str):
            return content.encode("utf-8"), content_type
        return json.dumps(content).encode("utf-8"), content_type

    def eval(self, ctx: ActivityContext) -> bool:
        given = RestInput.from_map({name: ctx.get_input(name) for name in _INPUT_NAMES})
        uri = self._target(given)
        method = self.settings.method
        ctx.logger.debug("REST Call: [%s] %s", method, uri)

        body, content_type = self._body(method, given.content)
        request = urllib.request.Request(uri, data=body, method=method)
        if body is not None:
            request.add_header("Content-Type", content_type)
        for key, value in (given.headers or self.settings.headers).items():
            request.add_header(key, value)

        try:
            response = self._opener.open(request, timeout=self.timeout)
        except urllib.error.HTTPError as exc:
            response = exc
        with response:
            status = response.getcode()
            ctx.logger.debug("Response status: %s", status)
            raw = response.read()
            if response.headers.get("Content-Type") == "application/json":
                data = json.loads(raw) if raw.strip() else None
            else:
                data = raw.decode("utf-8", errors="replace")

        output = RestOutput(status=status, data=data)
        for name, value in output.to_map().items():
            ctx.set_output(name, value)
        return True