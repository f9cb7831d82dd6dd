from typing import Optional
import logging

import requests
from lrclib import LrcLibAPI
from lrclib.exceptions import NotFoundError

from services.lyrics_finder_service.lyrics_searcher_interface import LyricsSearcherInterface, LyricsSearchResult

logger = logging.getLogger(__name__)


class LRCLibSearcher(LyricsSearcherInterface):
    """LRCLib implementation for plain lyrics searching"""

    def __init__(self, user_agent: str = "bechdel-music/0.1.0", client: Optional[LrcLibAPI] = None):
        self.name = "LRCLib"
        self._client = client or LrcLibAPI(user_agent=user_agent)

    def search_plain_lyrics(
        self,
        artist: str,
        title: str,
        album: Optional[str] = None,
        duration_ms: Optional[int] = None
    ) -> LyricsSearchResult:
        """Search for plain lyrics from LRCLib API"""
        logger.debug(f"LRCLib: Searching plain lyrics for {artist} - {title}")

        try:
            # exact lookup needs album and duration, otherwise use the search endpoint
            if album and duration_ms:
                try:
                    res = self._client.get_lyrics(
                        track_name=title,
                        artist_name=artist,
                        album_name=album,
                        duration=duration_ms // 1000,
                    )
                    if res.plain_lyrics:
                        return LyricsSearchResult(
                            found=True,
                            lyrics=res.plain_lyrics,
                            source=self.name,
                            track_id=str(res.id)
                        )
                except NotFoundError:
                    logger.debug(f"LRCLib: get_lyrics found nothing for '{title}', trying search...")

            results = self._client.search_lyrics(track_name=title, artist_name=artist)

            for song_res in results:
                if song_res.plain_lyrics and not song_res.instrumental:
                    return LyricsSearchResult(
                        found=True,
                        lyrics=song_res.plain_lyrics,
                        source=self.name,
                        track_id=str(song_res.id)
                    )

            logger.debug(f"LRCLib: No plain lyrics in search results for '{title}'")
            return LyricsSearchResult(found=False, source=self.name)

        except NotFoundError:
            logger.debug(f"LRCLib: Lyrics not found for '{title}' by {artist}")
            return LyricsSearchResult(found=False, source=self.name)
        except requests.RequestException as e:
            logger.error(f"LRCLib API request failed: {e}")
            return LyricsSearchResult(found=False, source=self.name, error=str(e))
