from typing import List
import logging

from common.models.models import SearchCandidate, SongRecord
from services.song_db.song_repository_interface import SongRepositoryInterface
from services.song_search_service.itunes_searcher import ITunesSearcher, SearchProviderError

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
LOCAL_RESULT_LIMIT = 10


class SongSearchService:
    """Searches the song catalog and merges in songs from the local store"""

    def __init__(self, searcher: ITunesSearcher, repository: SongRepositoryInterface, result_limit: int = 20):
        self.searcher = searcher
        self.repository = repository
        self.result_limit = result_limit

    @staticmethod
    def _record_to_candidate(record: SongRecord) -> SearchCandidate:
        return SearchCandidate(
            id=str(record.id),
            title=record.title,
            artist=record.artist,
            year=record.year,
            source='local',
            lyrics=record.lyrics or ''
        )

    def _local_results(self, query: str) -> List[SearchCandidate]:
        return [self._record_to_candidate(record) for record in self.repository.query(text_filter=query)]

    def search(self, query: str) -> List[SearchCandidate]:
        """
        Search for songs by free text.

        Catalog results come first, followed by local songs that are not
        already in the catalog results. If the catalog is unavailable only
        local songs are returned.
        """
        query = (query or '').strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        try:
            catalog_results = self.searcher.search(query, limit=self.result_limit)
        except SearchProviderError as e:
            logger.warning(f"Catalog search unavailable, using local songs only: {e}")
            return self._local_results(query)[:LOCAL_RESULT_LIMIT]

        seen = {(c.title.lower(), c.artist.lower()) for c in catalog_results}
        local_results = [
            candidate for candidate in self._local_results(query)
            if (candidate.title.lower(), candidate.artist.lower()) not in seen
        ][:LOCAL_RESULT_LIMIT]

        results = catalog_results + local_results
        logger.info(
            f"Search '{query}': {len(catalog_results)} catalog results, {len(local_results)} local results"
        )
        return results[:self.result_limit]
