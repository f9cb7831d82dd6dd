"""
Music Bechdel test analyzer package
"""

from .bechdel_analyzer import BechdelAnalyzer, InvalidSongInputError, analyze_bechdel_test, get_bechdel_analyzer
from .keyword_taxonomy import KeywordTaxonomy, get_keyword_taxonomy

__all__ = [
    'BechdelAnalyzer',
    'InvalidSongInputError',
    'analyze_bechdel_test',
    'get_bechdel_analyzer',
    'KeywordTaxonomy',
    'get_keyword_taxonomy',
]
