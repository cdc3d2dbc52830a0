"""
Syllabus detection.

A document is treated as the course syllabus when its filename says so, or
when its text contains enough distinct syllabus keywords. Changing the
lexicon or the threshold changes which documents get syllabus-specific
prompting, so both are pinned by tests.
"""

from typing import Iterable, List

SYLLABUS_FILENAME_MARKERS = ("syllabus", "outline")

SYLLABUS_KEYWORDS = (
    "course outline",
    "course description",
    "course objectives",
    "learning outcomes",
    "learning objectives",
    "grading policy",
    "office hours",
    "required textbook",
    "prerequisites",
    "course schedule",
    "attendance policy",
    "academic integrity",
    "late submission",
    "midterm",
    "final exam",
)

SYLLABUS_KEYWORD_THRESHOLD = 3


def filename_marks_syllabus(filename: str) -> bool:
    lowered = (filename or "").lower()
    return any(marker in lowered for marker in SYLLABUS_FILENAME_MARKERS)


def matching_keywords(text: str, keywords: Iterable[str] = SYLLABUS_KEYWORDS) -> List[str]:
    """Distinct lexicon keywords present in text (case-insensitive)."""
    lowered = (text or "").lower()
    return [keyword for keyword in dict.fromkeys(keywords) if keyword in lowered]


def is_syllabus(
    filename: str,
    text: str,
    keywords: Iterable[str] = SYLLABUS_KEYWORDS,
    threshold: int = SYLLABUS_KEYWORD_THRESHOLD
) -> bool:
    """
    Decide whether a document should be treated as the course syllabus.

    Args:
        filename: Original upload name
        text: Extracted text
        keywords: Keyword lexicon
        threshold: Number of distinct keywords needed

    Returns:
        True if the filename contains "syllabus"/"outline" or at least
        ``threshold`` distinct keywords occur in the text
    """
    if filename_marks_syllabus(filename):
        return True
    return len(matching_keywords(text, keywords)) >= threshold
