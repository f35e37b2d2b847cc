"""Image and GIF pickers backed by Unsplash and Giphy."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any

import requests

from quizlive.constants.network_constants import (
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    GIPHY_API_URL,
    UNSPLASH_API_URL,
)
from quizlive.constants.quiz_constants import MEDIA_PAGE_SIZE
from quizlive.core.errors import ApiError, ErrorKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MediaItem:
    id: str
    url: str
    description: str = ""


class MediaSource:
    """Base for a paged remote media search; subclasses build the request."""

    name = "media"

    def __init__(
        self,
        api_key: str | None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self._http = session or requests.Session()

    def fetch_page(self, query: str = "", page: int = 1) -> list[MediaItem]:
        if not self.api_key:
            raise ApiError(f"{self.name} API key is missing", kind=ErrorKind.UNAUTHORIZED)
        if page < 1:
            raise ValueError("page must be >= 1")
        url, params, headers = self._build_request(query.strip(), page)
        try:
            resp = self._http.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("%s request failed: %s", self.name, exc)
            raise ApiError(f"Failed to fetch {self.name} results", kind=ErrorKind.NETWORK) from exc
        if not resp.ok:
            logger.warning("%s returned %s", self.name, resp.status_code)
            raise ApiError(f"Failed to fetch {self.name} results", status_code=resp.status_code)
        return self._parse(resp.json())

    def _build_request(self, query: str, page: int) -> tuple[str, dict[str, Any], dict[str, str]]:
        raise NotImplementedError

    def _parse(self, body: Any) -> list[MediaItem]:
        raise NotImplementedError


class UnsplashSource(MediaSource):
    name = "Unsplash"

    def _build_request(self, query: str, page: int) -> tuple[str, dict[str, Any], dict[str, str]]:
        params: dict[str, Any] = {"page": page, "per_page": MEDIA_PAGE_SIZE}
        if query:
            url = f"{UNSPLASH_API_URL}/search/photos"
            params["query"] = query
        else:
            url = f"{UNSPLASH_API_URL}/photos"
        return url, params, {"Authorization": f"Client-ID {self.api_key}"}

    def _parse(self, body: Any) -> list[MediaItem]:
        # /photos returns a bare list, /search/photos wraps it in "results".
        photos = body.get("results", []) if isinstance(body, dict) else body or []
        return [
            MediaItem(
                id=str(photo.get("id", "")),
                url=(photo.get("urls") or {}).get("small", ""),
                description=photo.get("alt_description") or photo.get("description") or "",
            )
            for photo in photos
        ]


class GiphySource(MediaSource):
    name = "Giphy"

    def _build_request(self, query: str, page: int) -> tuple[str, dict[str, Any], dict[str, str]]:
        params: dict[str, Any] = {
            "api_key": self.api_key,
            "limit": MEDIA_PAGE_SIZE,
            "offset": (page - 1) * MEDIA_PAGE_SIZE,
        }
        if query:
            url = f"{GIPHY_API_URL}/search"
            params["q"] = query
        else:
            url = f"{GIPHY_API_URL}/trending"
        return url, params, {}

    def _parse(self, body: Any) -> list[MediaItem]:
        gifs = body.get("data", []) if isinstance(body, dict) else []
        return [
            MediaItem(
                id=str(gif.get("id", "")),
                url=((gif.get("images") or {}).get("fixed_height") or {}).get("url", ""),
                description=gif.get("title") or "",
            )
            for gif in gifs
        ]


@dataclass(slots=True)
class MediaPicker:
    """Accumulates pages of results for one picker dialog.

    A new query replaces the list; ``load_more`` appends the next page.
    """

    source: MediaSource
    query: str = ""
    page: int = 0
    items: list[MediaItem] = field(default_factory=list)
    has_more: bool = True

    def search(self, query: str = "") -> list[MediaItem]:
        self.query = query.strip()
        self.page = 1
        self.items = self.source.fetch_page(self.query, self.page)
        self.has_more = len(self.items) >= MEDIA_PAGE_SIZE
        return self.items

    def load_more(self) -> list[MediaItem]:
        if self.page == 0:
            return self.search(self.query)
        batch = self.source.fetch_page(self.query, self.page + 1)
        self.page += 1
        self.items.extend(batch)
        self.has_more = len(batch) >= MEDIA_PAGE_SIZE
        return batch
