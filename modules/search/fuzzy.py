"""
Fuzzy query patterns and relevance scoring.

``build_fuzzy_pattern`` turns a user query into a case-insensitive regex
used to pick candidate rows (``field__iregex``). ``score_fields`` ranks the
candidates: every field is run through five tests and each passing test adds
its weight, so a record that matches on several tiers and several fields
accumulates all of them.
"""
import re
from collections.abc import Mapping
from typing import Dict, Iterable, List

TIER_WEIGHTS = (
    ('exact', 100),
    ('starts_with', 75),
    ('contains_phrase', 50),
    ('contains_all_words', 25),
    ('contains_any_word', 10),
)

_WHITESPACE = re.compile(r'\s+')


def normalize_query(query) -> str:
    """Trim and collapse runs of whitespace; non-strings become ``""``."""
    if not isinstance(query, str):
        return ''
    return _WHITESPACE.sub(' ', query.strip())


def build_fuzzy_pattern(query) -> str:
    """
    Regex for loose matching of ``query``.

    A single word allows anything between its characters (``cat`` becomes
    ``c.*a.*t``). Several words must all appear, in any order
    (``(?=.*gloves)(?=.*latex).*``). Regex metacharacters are escaped.
    """
    cleaned = normalize_query(query)
    if not cleaned:
        return ''

    words = cleaned.split(' ')
    if len(words) == 1:
        return '.*'.join(re.escape(char) for char in cleaned)
    return ''.join(f'(?=.*{re.escape(word)})' for word in words) + '.*'


def _field_text(record, field: str) -> str:
    if isinstance(record, Mapping):
        value = record.get(field)
    else:
        value = getattr(record, field, None)
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        return ' '.join(str(v) for v in value if v is not None).lower()
    return str(value).lower()


def _tier_scores(text: str, phrase: str, words: List[str]) -> Dict[str, int]:
    passed = {
        'exact': text == phrase,
        'starts_with': text.startswith(phrase),
        'contains_phrase': phrase in text,
        'contains_all_words': all(word in text for word in words),
        'contains_any_word': any(word in text for word in words),
    }
    return {tier: (weight if passed[tier] else 0) for tier, weight in TIER_WEIGHTS}


def score_breakdown(query, record, fields: Iterable[str]) -> Dict[str, Dict[str, int]]:
    """Per-field, per-tier scores of ``record`` against ``query``."""
    phrase = normalize_query(query).lower()
    if not phrase:
        return {}
    words = phrase.split(' ')
    return {field: _tier_scores(_field_text(record, field), phrase, words) for field in fields}


def score_fields(query, record, fields: Iterable[str]) -> int:
    """Relevance of ``record``: the sum of every passing tier over every field."""
    breakdown = score_breakdown(query, record, fields)
    return sum(sum(tiers.values()) for tiers in breakdown.values())
