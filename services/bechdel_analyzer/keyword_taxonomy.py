"""
Keyword taxonomy used by the Bechdel analyzer.

Holds the fixed word lists (female names, romantic, ambition and friendship
keywords) as immutable data. The analyzer only ever talks to a
KeywordTaxonomy instance, so a different taxonomy can be passed in without
touching the scoring code.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple


# Common female given and stage names
FEMALE_NAMES = (
    'sarah', 'emily', 'jessica', 'jennifer', 'amanda', 'lisa', 'michelle',
    'nicole', 'katherine', 'stephanie', 'rachel', 'elizabeth', 'lauren',
    'megan', 'samantha', 'ashley', 'christina', 'kimberly', 'amy', 'angela',
    'charli', 'cupcakke', 'dorian', 'adele', 'taylor', 'ariana', 'billie',
    'dua', 'lizzo', 'miley', 'selena', 'rihanna', 'beyonce', 'lady', 'gaga',
    'katy', 'perry', 'olivia', 'sza', 'doja', 'card', 'megan', 'thee', 'stallion'
)

ROMANTIC_KEYWORDS = (
    'love', 'lover', 'heart', 'romance', 'kiss', 'hug', 'boyfriend', 'girlfriend',
    'husband', 'wife', 'marry', 'wedding', 'together', 'forever', 'soulmate',
    'crush', 'dating', 'relationship', 'broken heart', 'heartbreak', 'miss you',
    'need you', 'want you', 'desire', 'passion', 'intimate', 'darling', 'baby',
    'honey', 'sweetheart', 'dear', 'beloved'
)

AMBITION_KEYWORDS = (
    'dream', 'goal', 'success', 'achieve', 'win', 'power', 'strong', 'independent',
    'freedom', 'free', 'own', 'myself', 'self', 'confidence', 'believe', 'hope',
    'future', 'career', 'work', 'job', 'business', 'money', 'wealth', 'fame',
    'famous', 'star', 'celebrity', 'talent', 'skill', 'ability'
)

FRIENDSHIP_KEYWORDS = (
    'friend', 'friends', 'sister', 'sisters', 'girl', 'girls', 'together',
    'party', 'fun', 'dance', 'hang', 'support', 'help', 'trust', 'loyal',
    'bond', 'friendship', 'squad', 'crew', 'team', 'group'
)


def _unique_lowercase(words: Iterable[str]) -> Tuple[str, ...]:
    seen = []
    for word in words:
        word = word.lower()
        if word not in seen:
            seen.append(word)
    return tuple(seen)


@dataclass(frozen=True)
class KeywordTaxonomy:
    """Four fixed keyword sets, lowercased and deduplicated in their original order"""
    female_names: Tuple[str, ...]
    romantic_keywords: Tuple[str, ...]
    ambition_keywords: Tuple[str, ...]
    friendship_keywords: Tuple[str, ...]

    def __post_init__(self):
        # frozen dataclass, so normalise through object.__setattr__
        for field_name in ('female_names', 'romantic_keywords', 'ambition_keywords', 'friendship_keywords'):
            object.__setattr__(self, field_name, _unique_lowercase(getattr(self, field_name)))


DEFAULT_TAXONOMY = KeywordTaxonomy(
    female_names=FEMALE_NAMES,
    romantic_keywords=ROMANTIC_KEYWORDS,
    ambition_keywords=AMBITION_KEYWORDS,
    friendship_keywords=FRIENDSHIP_KEYWORDS,
)


def get_keyword_taxonomy() -> KeywordTaxonomy:
    """Get the default keyword taxonomy"""
    return DEFAULT_TAXONOMY
