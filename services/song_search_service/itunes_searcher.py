import requests
from typing import List, Optional
import logging

from common.models.models import SearchCandidate

logger = logging.getLogger(__name__)


class SearchProviderError(Exception):
    """Raised when the song catalog cannot be searched"""


class ITunesSearcher:
    """iTunes Search API client for song metadata"""

    def __init__(self, base_url: str = "https://itunes.apple.com/search", timeout: float = 10.0):
        self.name = "itunes"
        self.base_url = base_url
        self.timeout = timeout
        self.session = requests.Session()

    def search(self, query: str, limit: int = 20) -> List[SearchCandidate]:
        """
        Search the iTunes catalog for songs.

        Args:
            query: Free text search term
            limit: Maximum number of results

        Returns:
            Ranked list of SearchCandidate

        Raises:
            SearchProviderError: if the catalog is unreachable or answers garbage
        """
        params = {
            'term': query,
            'media': 'music',
            'entity': 'song',
            'limit': limit
        }

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise SearchProviderError(f"iTunes API request failed: {e}") from e
        except ValueError as e:
            raise SearchProviderError(f"iTunes API returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise SearchProviderError("iTunes API returned an unexpected payload")
        tracks = data.get('results') or []
        if not isinstance(tracks, list):
            raise SearchProviderError("iTunes API returned an unexpected results list")

        try:
            candidates = [self._track_to_candidate(track) for track in tracks]
        except (TypeError, AttributeError, KeyError) as e:
            raise SearchProviderError(f"iTunes API returned a malformed track: {e}") from e

        logger.debug(f"iTunes: {len(candidates)} results for '{query}'")
        return candidates

    @staticmethod
    def _release_year(release_date: Optional[str]) -> Optional[int]:
        # releaseDate looks like "2014-10-27T07:00:00Z"
        if not release_date or not release_date[:4].isdigit():
            return None
        return int(release_date[:4])

    @staticmethod
    def _duration_ms(value) -> Optional[int]:
        return value if isinstance(value, int) and value > 0 else None

    def _track_to_candidate(self, track: dict) -> SearchCandidate:
        return SearchCandidate(
            id=f"itunes_{track.get('trackId')}",
            title=str(track.get('trackName') or ''),
            artist=str(track.get('artistName') or ''),
            year=self._release_year(track.get('releaseDate')),
            album=track.get('collectionName'),
            artwork=track.get('artworkUrl100'),
            preview_url=track.get('previewUrl'),
            source=self.name,
            lyrics='',
            duration_ms=self._duration_ms(track.get('trackTimeMillis'))
        )
