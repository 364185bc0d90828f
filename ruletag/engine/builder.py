"""Derive an exact-match regex rule from sample descriptions.

Each sample is trimmed and escaped, then all samples are joined into one
anchored alternation::

    ["SQ *JOES COFFEE"]            -> ^\\s*SQ\\ \\*JOES\\ COFFEE\\s*$
    ["COLES 123", "COLES 456"]     -> ^\\s*(?:COLES\\ 123|COLES\\ 456)\\s*$

The rule therefore only matches descriptions equal to one of the samples,
ignoring surrounding whitespace and case.
"""

import re
from collections.abc import Sequence
from typing import Any

from ruletag.core.exceptions import ValidationError
from ruletag.engine.rules import MAX_NAME_LENGTH, MatchType, RuleSpec


def clean_samples(descriptions: Sequence[Any]) -> list[str]:
    """Trim samples, dropping blanks and non-strings. Duplicates are kept."""
    return [d.strip() for d in descriptions if isinstance(d, str) and d.strip()]


def build_pattern(samples: Sequence[str]) -> str:
    escaped = [re.escape(sample) for sample in samples]
    if len(escaped) == 1:
        return rf"^\s*{escaped[0]}\s*$"
    return rf"^\s*(?:{'|'.join(escaped)})\s*$"


def build_rule(
    name: str,
    descriptions: Sequence[Any],
    priority: int = 0,
    max_samples: int = 200,
    max_pattern_length: int = 10000,
) -> RuleSpec:
    """Build a regex ``RuleSpec`` matching exactly the given descriptions.

    Raises:
        ValidationError: empty or over-long name, no usable samples, too many
            samples, or a resulting pattern longer than ``max_pattern_length``.
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Rule name is required")
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Rule name is too long: {len(name)} characters (max {MAX_NAME_LENGTH})")

    samples = clean_samples(descriptions or [])
    if not samples:
        raise ValidationError("At least one non-empty description is required")
    if len(samples) > max_samples:
        raise ValidationError(f"Too many descriptions: {len(samples)} (max {max_samples})")

    pattern = build_pattern(samples)
    if len(pattern) > max_pattern_length:
        raise ValidationError(
            f"Resulting pattern is too long: {len(pattern)} characters (max {max_pattern_length})"
        )

    return RuleSpec(name=name, match_type=MatchType.REGEX, pattern=pattern, priority=priority or 0)
