from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any
from datetime import datetime

from common.models.bechdel_status import BechdelStatus


@dataclass(frozen=True)
class SongInput:
    """Song metadata plus lyrics handed to the classifier"""
    title: str
    artist: str
    lyrics: str
    year: Optional[int] = None
    collaborators: Optional[List[str]] = None


@dataclass
class TopicProfile:
    """Keyword counts per topic and the dominant one"""
    romantic: int = 0
    ambition: int = 0
    friendship: int = 0
    other: int = 0
    dominant_topic: str = "romantic"


@dataclass
class BechdelAnalysis:
    """Evidence summary behind a Bechdel result"""
    female_count: int = 0
    female_names: List[str] = field(default_factory=list)
    male_pronouns: int = 0
    female_pronouns: int = 0
    topics: TopicProfile = field(default_factory=TopicProfile)
    has_female_dialogue: bool = False
    non_romantic_context: bool = False


@dataclass
class BechdelResult:
    """Outcome of classifying one song"""
    passed: bool
    status: BechdelStatus
    confidence: int
    analysis: BechdelAnalysis
    reasoning: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        topics = asdict(self.analysis.topics)
        # the ambition bucket is reported as "self" as well
        topics['self'] = self.analysis.topics.ambition
        analysis = asdict(self.analysis)
        analysis['topics'] = topics
        return {
            'pass': self.passed,
            'status': self.status.value,
            'confidence': self.confidence,
            'analysis': analysis,
            'reasoning': list(self.reasoning),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BechdelResult":
        analysis_data = dict(data.get('analysis') or {})
        topics_data = dict(analysis_data.pop('topics', None) or {})
        topics_data.pop('self', None)
        return cls(
            passed=bool(data.get('pass', False)),
            status=BechdelStatus(data['status']),
            confidence=int(data.get('confidence', 0)),
            analysis=BechdelAnalysis(topics=TopicProfile(**topics_data), **analysis_data),
            reasoning=list(data.get('reasoning') or []),
        )


@dataclass
class SongRecord:
    """A song saved in the record store, tagged with its Bechdel result"""
    id: Optional[int] = None
    title: str = ""
    artist: str = ""
    year: Optional[int] = None
    lyrics: str = ""
    collaborators: Optional[List[str]] = None
    bechdel_result: Optional[BechdelResult] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = datetime.now()

    @property
    def status(self) -> Optional[BechdelStatus]:
        return self.bechdel_result.status if self.bechdel_result else None


@dataclass
class SearchCandidate:
    """A song candidate returned by the catalog search"""
    id: str
    title: str
    artist: str
    year: Optional[int] = None
    album: Optional[str] = None
    artwork: Optional[str] = None
    preview_url: Optional[str] = None
    source: str = "itunes"
    lyrics: str = ""
    duration_ms: Optional[int] = None


@dataclass
class DecadeStats:
    total: int = 0
    passed: int = 0
    failed: int = 0
    partial: int = 0


@dataclass
class SongStats:
    """Aggregated Bechdel outcomes over the saved songs"""
    total: int = 0
    passed: int = 0
    failed: int = 0
    partial: int = 0
    by_decade: Dict[str, DecadeStats] = field(default_factory=dict)
