"""
Tests for the song catalog search (iTunes client is faked, no network access)
"""

import pytest
import requests

from common.models.models import SearchCandidate, SongRecord
from services.song_db.song_db import SongDb
from services.song_search_service.itunes_searcher import ITunesSearcher, SearchProviderError
from services.song_search_service.song_search_service import SongSearchService


class FakeCatalog:
    def __init__(self, results=None, error=None):
        self.results = results or []
        self.error = error
        self.queries = []

    def search(self, query, limit=20):
        self.queries.append((query, limit))
        if self.error:
            raise self.error
        return list(self.results)[:limit]


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


@pytest.fixture
def db(tmp_path):
    db = SongDb(str(tmp_path / "search.db"))
    db.put(SongRecord(title="Flowers", artist="Miley Cyrus", year=2023, lyrics="i can buy myself flowers"))
    db.put(SongRecord(title="Wildflowers", artist="Local Band", lyrics="wild"))
    return db


def candidate(title, artist, index):
    return SearchCandidate(id=f"itunes_{index}", title=title, artist=artist, source="itunes")


def test_short_queries_return_nothing(db):
    catalog = FakeCatalog([candidate("Flowers", "Miley Cyrus", 1)])
    service = SongSearchService(catalog, db)

    assert service.search("f") == []
    assert service.search("  ") == []
    assert catalog.queries == []


def test_catalog_results_first_then_local_without_duplicates(db):
    catalog = FakeCatalog([candidate("FLOWERS", "miley cyrus", 1), candidate("Flowers II", "Someone", 2)])
    service = SongSearchService(catalog, db)

    results = service.search("flowers")

    assert [r.source for r in results] == ["itunes", "itunes", "local"]
    assert results[2].title == "Wildflowers"
    assert results[2].lyrics == "wild"


def test_results_are_capped(db):
    catalog = FakeCatalog([candidate(f"Flowers {i}", "Artist", i) for i in range(20)])
    service = SongSearchService(catalog, db, result_limit=20)

    results = service.search("flowers")

    assert len(results) == 20
    assert all(r.source == "itunes" for r in results)


def test_provider_failure_falls_back_to_local(db):
    catalog = FakeCatalog(error=SearchProviderError("iTunes API request failed"))
    service = SongSearchService(catalog, db)

    results = service.search("flowers")

    assert [r.title for r in results] == ["Flowers", "Wildflowers"]
    assert all(r.source == "local" for r in results)


def test_itunes_searcher_maps_tracks(monkeypatch):
    searcher = ITunesSearcher()
    payload = {
        "resultCount": 1,
        "results": [{
            "trackId": 1234,
            "trackName": "Flowers",
            "artistName": "Miley Cyrus",
            "collectionName": "Endless Summer Vacation",
            "releaseDate": "2023-01-12T08:00:00Z",
            "artworkUrl100": "https://example.com/art.jpg",
            "previewUrl": "https://example.com/preview.m4a",
            "trackTimeMillis": 200690,
        }]
    }
    captured = {}

    def fake_get(url, params=None, timeout=None):
        captured.update(params)
        return FakeResponse(200, payload)

    monkeypatch.setattr(searcher.session, "get", fake_get)

    results = searcher.search("flowers", limit=5)

    assert captured == {"term": "flowers", "media": "music", "entity": "song", "limit": 5}
    assert results == [SearchCandidate(
        id="itunes_1234",
        title="Flowers",
        artist="Miley Cyrus",
        year=2023,
        album="Endless Summer Vacation",
        artwork="https://example.com/art.jpg",
        preview_url="https://example.com/preview.m4a",
        source="itunes",
        lyrics="",
        duration_ms=200690,
    )]


def test_itunes_searcher_raises_on_http_error(monkeypatch):
    searcher = ITunesSearcher()
    monkeypatch.setattr(searcher.session, "get", lambda url, params=None, timeout=None: FakeResponse(503))

    with pytest.raises(SearchProviderError):
        searcher.search("flowers")


def test_non_dict_payload_falls_back_to_local(db, monkeypatch):
    searcher = ITunesSearcher()
    monkeypatch.setattr(searcher.session, "get", lambda url, params=None, timeout=None: FakeResponse(200, []))
    service = SongSearchService(searcher, db)

    results = service.search("flowers")

    assert [r.title for r in results] == ["Flowers", "Wildflowers"]
    assert all(r.source == "local" for r in results)


def test_non_list_results_raise_provider_error(monkeypatch):
    searcher = ITunesSearcher()
    monkeypatch.setattr(
        searcher.session, "get",
        lambda url, params=None, timeout=None: FakeResponse(200, {"results": "nope"})
    )

    with pytest.raises(SearchProviderError):
        searcher.search("flowers")


def test_malformed_track_falls_back_to_local(db, monkeypatch):
    searcher = ITunesSearcher()
    payload = {"results": [{"trackId": 1, "trackName": "Flowers", "artistName": "x"}, "not a track"]}
    monkeypatch.setattr(searcher.session, "get", lambda url, params=None, timeout=None: FakeResponse(200, payload))
    service = SongSearchService(searcher, db)

    results = service.search("flowers")

    assert [r.source for r in results] == ["local", "local"]


def test_null_track_fields_become_empty_strings(db, monkeypatch):
    searcher = ITunesSearcher()
    payload = {"results": [{"trackId": 1, "trackName": None, "artistName": "x"}]}
    monkeypatch.setattr(searcher.session, "get", lambda url, params=None, timeout=None: FakeResponse(200, payload))
    service = SongSearchService(searcher, db)

    results = service.search("flowers")

    assert results[0].id == "itunes_1"
    assert results[0].title == ""
    assert [r.title for r in results[1:]] == ["Flowers", "Wildflowers"]
