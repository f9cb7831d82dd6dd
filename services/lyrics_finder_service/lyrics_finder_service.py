from typing import Optional, List
import logging

from services.lyrics_finder_service.lyrics_searcher_interface import LyricsSearcherInterface, LyricsSearchResult

logger = logging.getLogger(__name__)


class LyricsFinderService:
    """Service for finding lyrics through a chain of interchangeable API implementations"""

    def __init__(self, lyrics_searchers: List[LyricsSearcherInterface]):
        """
        Initialize with lyrics searcher implementations, tried in order.

        Args:
            lyrics_searchers: Implementations of LyricsSearcherInterface
        """
        self.lyrics_searchers = list(lyrics_searchers)
        logger.info(
            f"LyricsFinderService initialized with searchers: "
            f"{', '.join(type(searcher).__name__ for searcher in self.lyrics_searchers)}"
        )

    def _search_with(
        self,
        searcher: LyricsSearcherInterface,
        artist: str,
        title: str,
        album: Optional[str],
        duration_ms: Optional[int]
    ) -> LyricsSearchResult:
        try:
            return searcher.search_plain_lyrics(artist, title, album, duration_ms)
        except Exception as e:
            logger.error(f"Error searching lyrics with {type(searcher).__name__}: {e}")
            return LyricsSearchResult(
                found=False,
                source=getattr(searcher, 'name', type(searcher).__name__),
                error=str(e)
            )

    def find_lyrics(
        self,
        artist: str,
        title: str,
        album: Optional[str] = None,
        duration_ms: Optional[int] = None
    ) -> LyricsSearchResult:
        """
        Find plain lyrics, falling back to the next searcher when one has none.

        Never raises: provider failures come back as a not-found result whose
        error is set when every searcher failed.
        """
        logger.info(f"Searching for lyrics: {artist} - {title}")

        errors = []
        for searcher in self.lyrics_searchers:
            result = self._search_with(searcher, artist, title, album, duration_ms)

            if result.found and result.lyrics:
                logger.info(f"Found lyrics for '{title}' by {artist} from {result.source}")
                logger.debug(f"Lyrics length: {len(result.lyrics)} characters")
                return result

            if result.error:
                errors.append(f"{result.source}: {result.error}")
            logger.info(f"No lyrics from {result.source} for '{title}' by {artist}")

        if self.lyrics_searchers and len(errors) == len(self.lyrics_searchers):
            logger.warning(f"All lyrics providers failed for '{title}' by {artist}")
            return LyricsSearchResult(found=False, error='; '.join(errors))

        return LyricsSearchResult(found=False)
