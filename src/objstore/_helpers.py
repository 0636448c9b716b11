from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import httpx

JSON_CONTENT_TYPE = re.compile(r"^application/json($|;)")


def slash(path: str) -> str:
    """Prefix ``path`` with a single leading slash."""
    return "/" + path.lstrip("/")


def build_query(options: Mapping[str, Any] | None) -> str:
    if not options:
        return ""
    return "?" + urlencode(options, doseq=True)


def is_json_content_type(content_type: str | None) -> bool:
    return bool(content_type) and JSON_CONTENT_TYPE.match(content_type) is not None  # type: ignore[arg-type]


def decode_list_response(response: httpx.Response) -> Any:
    if is_json_content_type(response.headers.get("content-type")):
        return response.json()
    return response.text
