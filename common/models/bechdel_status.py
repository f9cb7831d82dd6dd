from enum import Enum


class BechdelStatus(str, Enum):
    """Outcome of the music Bechdel test for a song."""
    PASS = "pass"
    PARTIAL = "partial"
    FAIL = "fail"
