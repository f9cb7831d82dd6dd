"""
Music Bechdel test analyzer.

Scores song lyrics against three criteria:
1. At least two women are referenced
2. They talk to each other (inferred from the volume of female references)
3. They talk about something other than a man

Everything is keyword driven and deterministic, so each result comes with
human-readable reasoning lines that mirror the criteria.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from common.models.bechdel_status import BechdelStatus
from common.models.models import SongInput, TopicProfile, BechdelAnalysis, BechdelResult
from services.bechdel_analyzer.keyword_taxonomy import KeywordTaxonomy, get_keyword_taxonomy

logger = logging.getLogger(__name__)

CHECK_MARK = "✓ "

FEMALE_PRONOUN_PATTERN = re.compile(r'\b(she|her|hers|herself)\b')
MALE_PRONOUN_PATTERN = re.compile(r'\b(he|him|his|himself)\b')
EXPLICIT_FEMALE_PATTERN = re.compile(r'\b(girls?|women|ladies?|females?)\b')
MALE_FOCUS_PATTERN = re.compile(r'\b(he|him|his|boy|boys?|man|men|guy|guys?|dude|dudes?)\b')
WHITESPACE_PATTERN = re.compile(r'\s+')

# Priority order for dominant topic ties
TOPIC_ORDER = ('romantic', 'self', 'friendship', 'other')


class InvalidSongInputError(ValueError):
    """Raised when a song cannot be classified (missing lyrics)"""


@dataclass
class LexicalScan:
    """Raw counts pulled out of the lowercased lyrics"""
    word_count: int = 0
    female_pronouns: int = 0
    male_pronouns: int = 0
    female_names: List[str] = field(default_factory=list)
    romantic_count: int = 0
    ambition_count: int = 0
    friendship_count: int = 0
    explicit_female_refs: int = 0
    male_focus: int = 0

    @property
    def other_count(self) -> int:
        # can go negative when one word matches several taxonomies ("together")
        return self.word_count - self.romantic_count - self.ambition_count - self.friendship_count

    @property
    def total_female_count(self) -> int:
        return self.female_pronouns + len(self.female_names) + self.explicit_female_refs


@dataclass
class CriteriaEvaluation:
    """The three criteria and the signals the third one is built from"""
    criteria1: bool
    criteria2: bool
    criteria3: bool
    is_romantic_song: bool
    clear_female_to_female_dialogue: bool
    clearly_about_men: bool
    romantic_about_man: bool
    non_romantic_topics: int

    @property
    def passed_count(self) -> int:
        return sum((self.criteria1, self.criteria2, self.criteria3))


def dominant_topic(topics: TopicProfile) -> str:
    """Topic with the highest count; ties go to the first one in TOPIC_ORDER"""
    counts = {
        'romantic': topics.romantic,
        'self': topics.ambition,
        'friendship': topics.friendship,
        'other': topics.other,
    }
    # max() keeps the first maximum it sees
    return max(TOPIC_ORDER, key=lambda topic: counts[topic])


def evaluate_criteria(scan: LexicalScan) -> CriteriaEvaluation:
    total_female = scan.total_female_count
    romantic = scan.romantic_count
    ambition = scan.ambition_count
    friendship = scan.friendship_count

    is_romantic_song = romantic > 3 and (romantic >= ambition + friendship or romantic > 5)
    clear_dialogue = total_female >= 2 and scan.female_pronouns >= 2
    clearly_about_men = scan.male_focus > 0 and scan.male_focus >= (ambition + friendship)
    romantic_about_man = is_romantic_song and not clear_dialogue
    non_romantic_topics = ambition + friendship + scan.other_count

    non_male_topic = not clearly_about_men and (
        not romantic_about_man or non_romantic_topics > romantic * 1.5
    )

    # Dialogue is not detected, it is inferred from the same reference count as criterion 1
    return CriteriaEvaluation(
        criteria1=total_female >= 2,
        criteria2=total_female >= 2,
        criteria3=non_male_topic,
        is_romantic_song=is_romantic_song,
        clear_female_to_female_dialogue=clear_dialogue,
        clearly_about_men=clearly_about_men,
        romantic_about_man=romantic_about_man,
        non_romantic_topics=non_romantic_topics,
    )


def score(passed_count: int, total_female_count: int) -> Tuple[BechdelStatus, bool, int]:
    """Map the number of passed criteria to (status, pass flag, confidence)"""
    if passed_count == 3:
        status, passed = BechdelStatus.PASS, True
        confidence = 85 + min(15, total_female_count * 2)
    elif passed_count == 2:
        status, passed = BechdelStatus.PARTIAL, False
        confidence = 60 + min(20, total_female_count * 3)
    else:
        status, passed = BechdelStatus.FAIL, False
        confidence = 30 + min(30, total_female_count * 5)

    return status, passed, min(100, confidence)


def build_reasoning(scan: LexicalScan, criteria: CriteriaEvaluation) -> List[str]:
    """Explain an already computed evaluation, criterion by criterion"""
    reasoning = []
    total_female = scan.total_female_count
    other_topics = scan.ambition_count + scan.friendship_count

    if not criteria.criteria1:
        reasoning.append(f"Only found {total_female} female reference(s) (need at least 2)")
    else:
        reasoning.append(f"{CHECK_MARK}Found at least 2 women ({total_female} female references)")

    if not criteria.criteria2:
        reasoning.append("No clear evidence of women talking to each other")
    else:
        reasoning.append(f"{CHECK_MARK}Evidence of women talking to each other")

    if not criteria.criteria3:
        if criteria.romantic_about_man:
            reasoning.append(
                f"Romantic song without clear female-to-female dialogue "
                f"({scan.romantic_count} romantic mentions) - likely about a man"
            )
        elif criteria.clearly_about_men:
            reasoning.append(
                f"They talk about men ({scan.male_focus} male references vs {other_topics} other topics)"
            )
        else:
            reasoning.append("Topic appears to focus on relationships/men rather than other subjects")
    else:
        reasoning.append(f"{CHECK_MARK}They talk about something other than a man")
        if scan.ambition_count > 0:
            reasoning.append(f"  - Self/ambition themes: {scan.ambition_count} mentions")
        if scan.friendship_count > 0:
            reasoning.append(f"  - Friendship/social themes: {scan.friendship_count} mentions")
        if criteria.is_romantic_song and criteria.clear_female_to_female_dialogue:
            reasoning.append("  - Romantic themes but with clear female-to-female dialogue")

    if scan.male_focus > 0 and scan.male_focus > scan.female_pronouns * 2:
        reasoning.append(f"Heavy focus on male pronouns/topics ({scan.male_focus} mentions)")

    if criteria.is_romantic_song:
        reasoning.append(f"Romantic song detected ({scan.romantic_count} romantic keywords)")

    return reasoning


class BechdelAnalyzer:
    """Classifies songs with the music Bechdel test"""

    def __init__(self, taxonomy: Optional[KeywordTaxonomy] = None):
        self.taxonomy = taxonomy or get_keyword_taxonomy()
        self._romantic_patterns = self._compile_keywords(self.taxonomy.romantic_keywords)
        self._ambition_patterns = self._compile_keywords(self.taxonomy.ambition_keywords)
        self._friendship_patterns = self._compile_keywords(self.taxonomy.friendship_keywords)

    @staticmethod
    def _compile_keywords(keywords) -> List[re.Pattern]:
        # keyword is a stem: "dream" also counts "dreams" and "dreaming"
        return [re.compile(r'\b' + re.escape(keyword) + r'\w*\b', re.IGNORECASE) for keyword in keywords]

    @staticmethod
    def _count_matches(text: str, patterns: List[re.Pattern]) -> int:
        return sum(len(pattern.findall(text)) for pattern in patterns)

    def scan(self, lyrics: str) -> LexicalScan:
        """Count pronouns, names and topic keywords in the lyrics"""
        text = lyrics.lower()

        female_names = [name for name in self.taxonomy.female_names if name in text]

        return LexicalScan(
            word_count=len(WHITESPACE_PATTERN.split(text)),
            female_pronouns=len(FEMALE_PRONOUN_PATTERN.findall(text)),
            male_pronouns=len(MALE_PRONOUN_PATTERN.findall(text)),
            female_names=female_names,
            romantic_count=self._count_matches(text, self._romantic_patterns),
            ambition_count=self._count_matches(text, self._ambition_patterns),
            friendship_count=self._count_matches(text, self._friendship_patterns),
            explicit_female_refs=len(EXPLICIT_FEMALE_PATTERN.findall(text)),
            male_focus=len(MALE_FOCUS_PATTERN.findall(text)),
        )

    def classify(self, song: SongInput) -> BechdelResult:
        """
        Run the Bechdel test on a song.

        Args:
            song: Song metadata and lyrics

        Returns:
            BechdelResult with status, confidence, analysis and reasoning

        Raises:
            InvalidSongInputError: if the song has no lyrics
        """
        if not song.lyrics or not song.lyrics.strip():
            raise InvalidSongInputError("Lyrics are required for analysis")

        scan = self.scan(song.lyrics)
        topics = TopicProfile(
            romantic=scan.romantic_count,
            ambition=scan.ambition_count,
            friendship=scan.friendship_count,
            other=scan.other_count,
        )
        topics.dominant_topic = dominant_topic(topics)

        criteria = evaluate_criteria(scan)
        status, passed, confidence = score(criteria.passed_count, scan.total_female_count)

        logger.debug(
            f"Analyzed '{song.title}' by {song.artist}: {criteria.passed_count}/3 criteria, "
            f"{scan.total_female_count} female references, status={status.value}"
        )

        return BechdelResult(
            passed=passed,
            status=status,
            confidence=confidence,
            analysis=BechdelAnalysis(
                female_count=scan.total_female_count,
                female_names=list(scan.female_names),
                male_pronouns=scan.male_pronouns,
                female_pronouns=scan.female_pronouns,
                topics=topics,
                has_female_dialogue=criteria.criteria2,
                non_romantic_context=criteria.criteria3,
            ),
            reasoning=build_reasoning(scan, criteria),
        )


def get_decade(year: Optional[int]) -> Optional[str]:
    """Decade label for a release year, e.g. 1994 -> '1990s'"""
    if not year:
        return None
    return f"{(year // 10) * 10}s"


def get_bechdel_analyzer(taxonomy: Optional[KeywordTaxonomy] = None) -> BechdelAnalyzer:
    return BechdelAnalyzer(taxonomy)


def analyze_bechdel_test(song: SongInput) -> BechdelResult:
    """Classify a song with the default taxonomy"""
    return get_bechdel_analyzer().classify(song)
