"""Utility functions for the round engine."""

import re


def parse_frequency(value) -> int | None:
    """Parse a frequency rank, tolerating thousands separators.

    Returns None for blank, non-numeric or non-positive values so that
    malformed ranks never pass a frequency filter.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float):
        if value != value or not value.is_integer():  # NaN or fractional
            return None
        return int(value) if value > 0 else None
    text = str(value).strip().replace(',', '').replace('_', '').replace(' ', '')
    if re.fullmatch(r'\d+(\.0+)?', text):
        rank = int(text.split('.')[0])
        return rank if rank > 0 else None
    return None


def clean_text(value) -> str:
    """Strip surrounding whitespace and stray quote marks from a cell."""
    if value is None:
        return ''
    text = str(value)
    if text.lower() == 'nan':
        return ''
    text = re.sub(r'["“”‘’]', '', text)
    return re.sub(r'\s+', ' ', text).strip()


def answer_match_rank(typed: str, gloss: str) -> int | None:
    """How closely a typed answer matches a gloss.

    0 for the whole gloss, 1 for one of its ;/, alternatives, 2 for a single
    word of it, None for no match. Lower is better.
    """
    typed = ' '.join((typed or '').lower().split())
    full = ' '.join((gloss or '').lower().split())
    if not typed or not full:
        return None
    if typed == full:
        return 0
    if typed in [part.strip() for part in re.split(r'[;,]+', full)]:
        return 1
    if typed in re.split(r'[\s;,]+', full):
        return 2
    return None
