from typing import List, Optional
import logging

from common.models.bechdel_status import BechdelStatus
from common.models.models import SongInput, SongRecord, BechdelResult, SongStats, DecadeStats
from services.bechdel_analyzer.bechdel_analyzer import BechdelAnalyzer, get_decade
from services.song_db.song_repository_interface import SongRepositoryInterface

logger = logging.getLogger(__name__)


def _count_status(stats, status: BechdelStatus):
    stats.total += 1
    if status == BechdelStatus.PASS:
        stats.passed += 1
    elif status == BechdelStatus.PARTIAL:
        stats.partial += 1
    else:
        stats.failed += 1


class SongService:
    """Analyzes songs and keeps them in the record store"""

    def __init__(self, analyzer: BechdelAnalyzer, repository: SongRepositoryInterface):
        self.analyzer = analyzer
        self.repository = repository

    def analyze(self, song: SongInput) -> BechdelResult:
        return self.analyzer.classify(song)

    def add_song(self, song: SongInput) -> SongRecord:
        """Classify a song and save it tagged with the result"""
        result = self.analyzer.classify(song)

        record = SongRecord(
            title=song.title,
            artist=song.artist,
            year=song.year,
            lyrics=song.lyrics,
            collaborators=list(song.collaborators) if song.collaborators else None,
            bechdel_result=result
        )
        record = self.repository.put(record)

        logger.info(
            f"Added song '{record.title}' by {record.artist}: {result.status.value} "
            f"({result.confidence}% confidence)"
        )
        return record

    def get_songs(self, query: Optional[str] = None, status: Optional[BechdelStatus] = None) -> List[SongRecord]:
        return self.repository.query(text_filter=query or None, status_filter=status)

    def get_stats(self) -> SongStats:
        """Pass/partial/fail totals, overall and per release decade"""
        stats = SongStats()

        for record in self.repository.query():
            if not record.bechdel_result:
                continue

            status = record.bechdel_result.status
            _count_status(stats, status)

            decade = get_decade(record.year)
            if decade:
                if decade not in stats.by_decade:
                    stats.by_decade[decade] = DecadeStats()
                _count_status(stats.by_decade[decade], status)

        logger.debug(f"Computed stats over {stats.total} analyzed songs")
        return stats


def get_song_service(analyzer: BechdelAnalyzer, repository: SongRepositoryInterface) -> SongService:
    return SongService(analyzer, repository)
