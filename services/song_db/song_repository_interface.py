from abc import ABC, abstractmethod
from typing import Optional, List

from common.models.bechdel_status import BechdelStatus
from common.models.models import SongRecord


class SongRepositoryInterface(ABC):
    """Interface for song record stores"""

    @abstractmethod
    def put(self, record: SongRecord) -> SongRecord:
        """
        Save a song record.

        Args:
            record: Song already tagged with its Bechdel result

        Returns:
            The stored record, with its id assigned
        """
        pass

    @abstractmethod
    def query(
        self,
        text_filter: Optional[str] = None,
        status_filter: Optional[BechdelStatus] = None
    ) -> List[SongRecord]:
        """
        List stored songs in insertion order.

        Args:
            text_filter: Case-insensitive substring of the title or artist (optional)
            status_filter: Only songs with this Bechdel status (optional)

        Returns:
            Matching song records
        """
        pass

    @abstractmethod
    def get_song(self, song_id: int) -> Optional[SongRecord]:
        pass

    @abstractmethod
    def count(self) -> int:
        pass
