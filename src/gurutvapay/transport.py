"""Request descriptions handed to the dispatcher."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlencode

import httpx

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)


@dataclass(frozen=True)
class RawBody:
    content: Union[str, bytes]
    content_type: Optional[str] = FORM_CONTENT_TYPE


@dataclass(frozen=True)
class FormBody:
    fields: Mapping[str, Any]


@dataclass(frozen=True)
class JsonBody:
    value: Any


Body = Union[RawBody, FormBody, JsonBody]


def encode_body(body: Body) -> tuple[bytes, Optional[str]]:
    if isinstance(body, RawBody):
        content = body.content.encode("utf-8") if isinstance(body.content, str) else body.content
        return content, body.content_type
    if isinstance(body, FormBody):
        return urlencode({k: _form_value(v) for k, v in body.fields.items()}).encode("utf-8"), FORM_CONTENT_TYPE
    if isinstance(body, JsonBody):
        return json.dumps(body.value, separators=(",", ":")).encode("utf-8"), JSON_CONTENT_TYPE
    raise TypeError(f"Unsupported body type: {type(body).__name__}")


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def build_url(root: str, path_or_url: str) -> str:
    """Resolve a relative API path against ``root``; absolute URLs pass through."""
    if _ABSOLUTE_URL.match(path_or_url):
        return path_or_url
    separator = "" if path_or_url.startswith("/") else "/"
    return f"{root}{separator}{path_or_url}"


@dataclass(frozen=True)
class RequestSpec:
    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Optional[Mapping[str, Any]] = None
    body: Optional[Body] = None

    def to_httpx(self) -> httpx.Request:
        headers = httpx.Headers()
        content: Optional[bytes] = None
        if self.body is not None:
            content, content_type = encode_body(self.body)
            if content_type:
                headers["Content-Type"] = content_type
        # caller-supplied headers override the body's default content type
        headers.update(self.headers)
        url = httpx.URL(self.url)
        if self.params:
            # merged into any query string already on the URL
            url = url.copy_merge_params({k: _form_value(v) for k, v in self.params.items()})
        return httpx.Request(self.method.upper(), url, headers=headers, content=content)


__all__ = [
    "Body",
    "FormBody",
    "JsonBody",
    "RawBody",
    "RequestSpec",
    "build_url",
    "encode_body",
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
]
