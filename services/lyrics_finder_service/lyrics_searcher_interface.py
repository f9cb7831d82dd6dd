from abc import ABC, abstractmethod
from typing import Optional
from dataclasses import dataclass


@dataclass
class LyricsSearchResult:
    """Result from lyrics search"""
    found: bool
    lyrics: Optional[str] = None
    source: Optional[str] = None  # Name of the API source
    track_id: Optional[str] = None  # ID from the source API
    error: Optional[str] = None  # Set when the source could not be reached


class LyricsSearcherInterface(ABC):
    """Interface for lyrics searcher implementations"""

    name: str = "unknown"

    @abstractmethod
    def search_plain_lyrics(
        self,
        artist: str,
        title: str,
        album: Optional[str] = None,
        duration_ms: Optional[int] = None
    ) -> LyricsSearchResult:
        """
        Search for plain text lyrics.

        Args:
            artist: Artist name
            title: Song title
            album: Album name (optional)
            duration_ms: Song duration in milliseconds (optional)

        Returns:
            LyricsSearchResult with plain lyrics if found
        """
        pass
