"""
Tests for the lyrics finder service and its searchers (no network access)
"""

from types import SimpleNamespace
from typing import Optional

import requests
from lrclib.exceptions import NotFoundError

from services.lyrics_finder_service.lyrics_finder_service import LyricsFinderService
from services.lyrics_finder_service.lyrics_searcher_interface import LyricsSearcherInterface, LyricsSearchResult
from services.lyrics_finder_service.lyrics_apis.lyrics_ovh_searcher import LyricsOvhSearcher
from services.lyrics_finder_service.lyrics_apis.lrclib_searcher import LRCLibSearcher


class FakeSearcher(LyricsSearcherInterface):
    def __init__(self, name, result=None, exception=None):
        self.name = name
        self.result = result
        self.exception = exception
        self.calls = []

    def search_plain_lyrics(self, artist: str, title: str, album: Optional[str] = None,
                            duration_ms: Optional[int] = None) -> LyricsSearchResult:
        self.calls.append((artist, title))
        if self.exception:
            raise self.exception
        return self.result


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON")
        return self._payload


def make_not_found_error():
    response = requests.Response()
    response.status_code = 404
    response.reason = "Not Found"
    response.url = "https://lrclib.net/api/get"
    response._content = b""
    return NotFoundError(response)


def test_first_found_result_wins():
    first = FakeSearcher("first", LyricsSearchResult(found=True, lyrics="first lyrics", source="first"))
    second = FakeSearcher("second", LyricsSearchResult(found=True, lyrics="second lyrics", source="second"))

    result = LyricsFinderService([first, second]).find_lyrics("Artist", "Title")

    assert result.found
    assert result.lyrics == "first lyrics"
    assert second.calls == []


def test_falls_back_to_next_searcher():
    first = FakeSearcher("first", LyricsSearchResult(found=False, source="first"))
    second = FakeSearcher("second", LyricsSearchResult(found=True, lyrics="la la", source="second"))

    result = LyricsFinderService([first, second]).find_lyrics("Artist", "Title")

    assert result.source == "second"
    assert first.calls == [("Artist", "Title")]


def test_exceptions_are_contained():
    broken = FakeSearcher("broken", exception=RuntimeError("boom"))
    working = FakeSearcher("working", LyricsSearchResult(found=True, lyrics="words", source="working"))

    result = LyricsFinderService([broken, working]).find_lyrics("Artist", "Title")

    assert result.found
    assert result.lyrics == "words"


def test_not_found_has_no_error():
    finder = LyricsFinderService([FakeSearcher("empty", LyricsSearchResult(found=False, source="empty"))])

    result = finder.find_lyrics("Artist", "Title")

    assert not result.found
    assert result.error is None


def test_all_providers_failing_reports_error():
    finder = LyricsFinderService([
        FakeSearcher("down", exception=requests.ConnectionError("offline")),
        FakeSearcher("also down", LyricsSearchResult(found=False, source="also down", error="timeout")),
    ])

    result = finder.find_lyrics("Artist", "Title")

    assert not result.found
    assert "offline" in result.error
    assert "timeout" in result.error


def test_lyrics_ovh_found(monkeypatch):
    searcher = LyricsOvhSearcher(base_url="https://api.lyrics.ovh/v1/")
    requested = []

    def fake_get(url, timeout=None):
        requested.append(url)
        return FakeResponse(200, {"lyrics": "she sings"})

    monkeypatch.setattr(searcher.session, "get", fake_get)

    result = searcher.search_plain_lyrics("Björk", "Army of Me")

    assert result.found
    assert result.lyrics == "she sings"
    assert result.source == "lyrics.ovh"
    assert requested == ["https://api.lyrics.ovh/v1/Bj%C3%B6rk/Army%20of%20Me"]


def test_lyrics_ovh_not_found(monkeypatch):
    searcher = LyricsOvhSearcher()
    monkeypatch.setattr(searcher.session, "get", lambda url, timeout=None: FakeResponse(404, {"error": "No lyrics found"}))

    result = searcher.search_plain_lyrics("Nobody", "Nothing")

    assert not result.found
    assert result.error is None


def test_lyrics_ovh_network_error(monkeypatch):
    searcher = LyricsOvhSearcher()

    def fake_get(url, timeout=None):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(searcher.session, "get", fake_get)

    result = searcher.search_plain_lyrics("Artist", "Title")

    assert not result.found
    assert "offline" in result.error


def test_lrclib_uses_search_results():
    client = SimpleNamespace(
        get_lyrics=lambda **kwargs: SimpleNamespace(id=1, plain_lyrics=None, instrumental=False),
        search_lyrics=lambda **kwargs: [
            SimpleNamespace(id=2, plain_lyrics=None, instrumental=True),
            SimpleNamespace(id=3, plain_lyrics="her words", instrumental=False),
        ],
    )

    result = LRCLibSearcher(client=client).search_plain_lyrics("Artist", "Title", "Album", 180000)

    assert result.found
    assert result.lyrics == "her words"
    assert result.track_id == "3"
    assert result.source == "LRCLib"


def test_lrclib_not_found():
    def not_found(**kwargs):
        raise make_not_found_error()

    client = SimpleNamespace(get_lyrics=not_found, search_lyrics=not_found)

    result = LRCLibSearcher(client=client).search_plain_lyrics("Artist", "Title", "Album", 180000)

    assert not result.found
    assert result.error is None


def test_lrclib_exact_lookup_with_album_and_duration():
    lookups = []

    def get_lyrics(**kwargs):
        lookups.append(kwargs)
        return SimpleNamespace(id=7, plain_lyrics="she knows", instrumental=False)

    def search_lyrics(**kwargs):
        raise AssertionError("search should not run after an exact hit")

    client = SimpleNamespace(get_lyrics=get_lyrics, search_lyrics=search_lyrics)

    result = LRCLibSearcher(client=client).search_plain_lyrics("Artist", "Title", "Album", 215900)

    assert lookups == [{"track_name": "Title", "artist_name": "Artist", "album_name": "Album", "duration": 215}]
    assert result.found
    assert result.lyrics == "she knows"
    assert result.track_id == "7"


def test_lrclib_without_duration_skips_exact_lookup():
    def get_lyrics(**kwargs):
        raise AssertionError("exact lookup needs album and duration")

    client = SimpleNamespace(
        get_lyrics=get_lyrics,
        search_lyrics=lambda **kwargs: [SimpleNamespace(id=4, plain_lyrics="words", instrumental=False)],
    )

    result = LRCLibSearcher(client=client).search_plain_lyrics("Artist", "Title", "Album")

    assert result.track_id == "4"


class RecordingSearcher(LyricsSearcherInterface):
    def __init__(self):
        self.name = "recording"
        self.received = []

    def search_plain_lyrics(self, artist, title, album=None, duration_ms=None):
        self.received.append((album, duration_ms))
        return LyricsSearchResult(found=False, source=self.name)


def test_finder_forwards_album_and_duration():
    searcher = RecordingSearcher()

    LyricsFinderService([searcher]).find_lyrics("Artist", "Title", album="Album", duration_ms=180000)

    assert searcher.received == [("Album", 180000)]
