import requests
from typing import Optional
from urllib.parse import quote
import logging

from services.lyrics_finder_service.lyrics_searcher_interface import LyricsSearcherInterface, LyricsSearchResult

logger = logging.getLogger(__name__)


class LyricsOvhSearcher(LyricsSearcherInterface):
    """lyrics.ovh implementation for lyrics searching (free, no API key)"""

    def __init__(self, base_url: str = "https://api.lyrics.ovh/v1", timeout: float = 10.0):
        self.name = "lyrics.ovh"
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': 'Mozilla/5.0 (compatible; BechdelTest/1.0)'
        })

    def search_plain_lyrics(
        self,
        artist: str,
        title: str,
        album: Optional[str] = None,
        duration_ms: Optional[int] = None
    ) -> LyricsSearchResult:
        """Search for plain lyrics from lyrics.ovh"""
        logger.debug(f"lyrics.ovh: Searching lyrics for {artist} - {title}")

        url = f"{self.base_url}/{quote(artist, safe='')}/{quote(title, safe='')}"

        try:
            response = self.session.get(url, timeout=self.timeout)

            if response.status_code == 404:
                logger.debug("lyrics.ovh: No lyrics found")
                return LyricsSearchResult(found=False, source=self.name)

            response.raise_for_status()
            data = response.json()

            lyrics = data.get('lyrics')
            if not lyrics:
                logger.debug("lyrics.ovh: Empty lyrics in response")
                return LyricsSearchResult(found=False, source=self.name)

            return LyricsSearchResult(found=True, lyrics=lyrics, source=self.name)

        except requests.RequestException as e:
            logger.error(f"lyrics.ovh API request failed: {e}")
            return LyricsSearchResult(found=False, source=self.name, error=str(e))
        except ValueError as e:
            logger.error(f"lyrics.ovh parsing error: {e}")
            return LyricsSearchResult(found=False, source=self.name, error=str(e))
