"""Case-insensitive matching rules shared by the lookup services."""

from typing import Optional

from ..dtos.autocomplete_dto import QualitySuggestion

LIKE_ESCAPE = "\\"


def normalize_query(text: Optional[str]) -> str:
    return text or ""


def matches_substring(haystack: Optional[str], needle: str) -> bool:
    """
    Plain containment after folding both sides to lower case. PostgreSQL ILIKE
    folds the same way, so SQL pre-filters never drop a row accepted here.
    """
    if haystack is None:
        return False
    return needle.lower() in haystack.lower()


def matches_alias(record: QualitySuggestion, needle: str) -> bool:
    if matches_substring(record.code, needle):
        return True
    return any(matches_substring(alias, needle) for alias in record.aliases)


def escape_like(text: str) -> str:
    """
    Escapes LIKE metacharacters so a pushed-down ILIKE pattern built from
    user text behaves as literal substring containment. Pair with
    `escape=LIKE_ESCAPE` on the SQLAlchemy operator.
    """
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_pattern(text: str) -> str:
    return f"%{escape_like(text)}%"
