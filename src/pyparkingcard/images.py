"""Photo reference resolution."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .const import CLOUDINARY_IMAGE_URL, DEFAULT_PLACEHOLDER_URL, UPLOADS_PATH
from .util import normalize_base_url


def _is_absolute(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


class ImageResolver:
    """Turn raw photo references into absolute image URLs.

    A reference may be an absolute URL, a root-relative path, a CDN public id
    (``folder/name``) when a Cloudinary cloud name is configured, a bare upload
    filename, or a mapping carrying ``url``, ``path`` or ``filename``.
    """

    def __init__(
        self,
        api_base: str,
        *,
        cloud_name: str | None = None,
        placeholder_url: str = DEFAULT_PLACEHOLDER_URL,
    ) -> None:
        self._api_base = normalize_base_url(api_base)
        self._cloud_name = cloud_name.strip() if isinstance(cloud_name, str) else ""
        self._placeholder_url = placeholder_url

    @property
    def placeholder_url(self) -> str:
        return self._placeholder_url

    def resolve(self, raw: Any) -> list[str]:
        """Return at least one URL for the reference, in input order."""
        if isinstance(raw, Sequence) and not isinstance(raw, str):
            items = list(raw)
        elif raw:
            items = [raw]
        else:
            items = []
        urls = [url for url in (self.resolve_one(item) for item in items) if url]
        if not urls:
            return [self._placeholder_url]
        return urls

    def resolve_one(self, item: Any) -> str | None:
        if isinstance(item, str):
            return self._resolve_string(item)
        if isinstance(item, Mapping):
            return self._resolve_mapping(item)
        return None

    def _resolve_string(self, value: str) -> str | None:
        if not value:
            return None
        if _is_absolute(value):
            return value
        if value.startswith("/"):
            return f"{self._api_base}{value}"
        if self._cloud_name and "/" in value:
            return CLOUDINARY_IMAGE_URL.format(cloud_name=self._cloud_name, path=value)
        return self._upload_url(value)

    def _resolve_mapping(self, item: Mapping[str, Any]) -> str | None:
        url = item.get("url")
        if isinstance(url, str) and url:
            return url
        path = item.get("path")
        if isinstance(path, str) and path:
            if _is_absolute(path):
                return path
            if path.startswith("/"):
                return f"{self._api_base}{path}"
        filename = item.get("filename")
        if isinstance(filename, str) and filename:
            return self._upload_url(filename)
        return None

    def _upload_url(self, filename: str) -> str:
        return f"{self._api_base}{UPLOADS_PATH}/{filename}"


def resolve_images(
    raw: Any,
    *,
    api_base: str,
    cloud_name: str | None = None,
    placeholder_url: str = DEFAULT_PLACEHOLDER_URL,
) -> list[str]:
    resolver = ImageResolver(api_base, cloud_name=cloud_name, placeholder_url=placeholder_url)
    return resolver.resolve(raw)
