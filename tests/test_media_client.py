from __future__ import annotations

import pytest

from quizlive.constants.quiz_constants import MEDIA_PAGE_SIZE
from quizlive.core.errors import ApiError, ErrorKind
from quizlive.core.services.media_client import GiphySource, MediaPicker, UnsplashSource


def _photos(count: int, start: int = 0) -> list[dict]:
    return [
        {"id": f"p{i}", "urls": {"small": f"https://img.test/{i}.jpg"}, "alt_description": f"photo {i}"}
        for i in range(start, start + count)
    ]


class TestUnsplashSource:
    def test_missing_key_fails_before_any_request(self, make_http):
        http = make_http()
        source = UnsplashSource(None, session=http)

        with pytest.raises(ApiError) as excinfo:
            source.fetch_page()

        assert excinfo.value.kind == ErrorKind.UNAUTHORIZED
        assert http.calls == []

    def test_browse_uses_photos_endpoint(self, make_http, make_response):
        http = make_http(make_response(200, _photos(2)))
        source = UnsplashSource("key-1", session=http)

        items = source.fetch_page()

        call = http.calls[0]
        assert call["url"] == "https://api.unsplash.com/photos"
        assert call["params"] == {"page": 1, "per_page": MEDIA_PAGE_SIZE}
        assert call["headers"] == {"Authorization": "Client-ID key-1"}
        assert [item.url for item in items] == ["https://img.test/0.jpg", "https://img.test/1.jpg"]

    def test_search_uses_search_endpoint(self, make_http, make_response):
        http = make_http(make_response(200, {"results": _photos(1)}))
        source = UnsplashSource("key-1", session=http)

        items = source.fetch_page(" cats ", page=2)

        call = http.calls[0]
        assert call["url"] == "https://api.unsplash.com/search/photos"
        assert call["params"]["query"] == "cats"
        assert call["params"]["page"] == 2
        assert items[0].description == "photo 0"

    def test_http_failure(self, make_http, make_response):
        source = UnsplashSource("key-1", session=make_http(make_response(403, {"errors": ["Rate limited"]})))

        with pytest.raises(ApiError) as excinfo:
            source.fetch_page()

        assert excinfo.value.status_code == 403

    def test_page_must_be_positive(self, make_http):
        with pytest.raises(ValueError):
            UnsplashSource("key-1", session=make_http()).fetch_page(page=0)


class TestGiphySource:
    def test_offset_follows_page(self, make_http, make_response):
        http = make_http(
            make_response(200, {"data": [{"id": "g1", "title": "dance", "images": {"fixed_height": {"url": "u"}}}]})
        )
        source = GiphySource("gif-key", session=http)

        items = source.fetch_page("dance", page=3)

        call = http.calls[0]
        assert call["url"] == "https://api.giphy.com/v1/gifs/search"
        assert call["params"] == {"api_key": "gif-key", "limit": MEDIA_PAGE_SIZE, "offset": 2 * MEDIA_PAGE_SIZE, "q": "dance"}
        assert items[0].url == "u"

    def test_trending_without_query(self, make_http, make_response):
        http = make_http(make_response(200, {"data": []}))

        GiphySource("gif-key", session=http).fetch_page()

        assert http.calls[0]["url"] == "https://api.giphy.com/v1/gifs/trending"
        assert http.calls[0]["params"]["offset"] == 0


class TestMediaPicker:
    def test_new_query_replaces_and_load_more_appends(self, make_http, make_response):
        http = make_http(
            make_response(200, {"results": _photos(MEDIA_PAGE_SIZE)}),
            make_response(200, {"results": _photos(5, start=MEDIA_PAGE_SIZE)}),
            make_response(200, {"results": _photos(2)}),
        )
        picker = MediaPicker(UnsplashSource("key-1", session=http))

        picker.search("cats")
        assert picker.has_more

        batch = picker.load_more()
        assert len(batch) == 5
        assert len(picker.items) == MEDIA_PAGE_SIZE + 5
        assert picker.page == 2
        assert not picker.has_more

        picker.search("dogs")
        assert len(picker.items) == 2
        assert picker.page == 1
        assert http.calls[1]["params"]["page"] == 2

    def test_load_more_before_search_starts_at_first_page(self, make_http, make_response):
        http = make_http(make_response(200, _photos(3)))
        picker = MediaPicker(UnsplashSource("key-1", session=http))

        picker.load_more()

        assert picker.page == 1
        assert http.calls[0]["params"]["page"] == 1
