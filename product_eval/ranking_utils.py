"""
Preference-aware ranking.

Reorders extracted features and description sentences so that the ones
mentioning the user's evaluation criteria come first. Matching is a
case-insensitive substring test. All sorts are stable and return new lists.
"""

from typing import Iterable, List, Sequence


def _normalize_criteria(criteria: Iterable[str]) -> List[str]:
    return [c.lower() for c in (criteria or [])]


def matches_criteria(text: str, criteria: Sequence[str]) -> bool:
    """True if text mentions at least one criterion."""
    lowered = text.lower()
    return any(criterion in lowered for criterion in _normalize_criteria(criteria))


def relevance_score(text: str, criteria: Sequence[str]) -> int:
    """Number of criteria mentioned anywhere in text."""
    lowered = text.lower()
    return sum(1 for criterion in _normalize_criteria(criteria) if criterion in lowered)


def rank_features(features: Sequence[str], criteria: Sequence[str]) -> List[str]:
    """Put features matching any criterion first, keeping relative order otherwise."""
    if not criteria or not features:
        return list(features)
    return sorted(features, key=lambda feature: 0 if matches_criteria(feature, criteria) else 1)


def rank_descriptions(descriptions: Sequence[str], criteria: Sequence[str]) -> List[str]:
    """Order descriptions by relevance score, highest first; ties keep document order."""
    if not criteria or not descriptions:
        return list(descriptions)
    return sorted(descriptions, key=lambda text: relevance_score(text, criteria), reverse=True)
