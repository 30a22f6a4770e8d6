"""
Heuristics that turn Natural Language API annotations into product fields.

Entity classification rules (single pass, in service order):
- Name: first CONSUMER_GOOD entity with salience > 0.1
- Price: first PRICE entity
- Feature: OTHER entity with mentions whose name has a space and is > 10 chars
- Specification: any other OTHER entity with mentions whose name is "key: value"

Name and price are first-write-wins while specifications overwrite earlier
values for the same key.
"""

from typing import List, Optional, Sequence, Tuple

from .models import AnnotatedEntity, AnnotatedSentence, ProductInfo, UserPreferences
from .ranking_utils import rank_descriptions, rank_features

NAME_SALIENCE_THRESHOLD = 0.1
MIN_FEATURE_LENGTH = 10
MIN_DESCRIPTION_LENGTH = 40

# Matched case-sensitively against the raw sentence
BOILERPLATE_PHRASES = ['click', 'login', 'sign in', 'cookie', 'review by']


def looks_like_feature(name: str) -> bool:
    return ' ' in name and len(name) > MIN_FEATURE_LENGTH


def parse_specification(name: str) -> Optional[Tuple[str, str]]:
    """
    Split "Key: value" on the first colon.

    Returns None when there is no colon or either side is blank.

    Examples:
        >>> parse_specification("Battery life: 8 hours")
        ('Battery life', '8 hours')

        >>> parse_specification("Weight:")
    """
    if ':' not in name:
        return None
    key, value = name.split(':', 1)
    key, value = key.strip(), value.strip()
    if not key or not value:
        return None
    return key, value


def classify_entities(entities: Sequence[AnnotatedEntity],
                      preferences: Optional[UserPreferences] = None) -> ProductInfo:
    """Build ProductInfo from annotated entities, ranking features by preferences."""
    name = ''
    price = ''
    features: List[str] = []
    specifications = {}

    for entity in entities:
        if not entity.name:
            continue

        if entity.type == 'CONSUMER_GOOD':
            if not name and entity.salience > NAME_SALIENCE_THRESHOLD:
                name = entity.name
        elif entity.type == 'PRICE':
            if not price:
                price = entity.name
        elif entity.type == 'OTHER' and entity.mentions:
            if looks_like_feature(entity.name):
                features.append(entity.name)
            else:
                spec = parse_specification(entity.name)
                if spec:
                    key, value = spec
                    specifications[key] = value

    if preferences and preferences.evaluation_criteria:
        features = rank_features(features, preferences.evaluation_criteria)

    return ProductInfo(
        name=name,
        price=price,
        features=features,
        specifications=specifications,
    )


def is_boilerplate(text: str) -> bool:
    return any(phrase in text for phrase in BOILERPLATE_PHRASES)


def select_descriptions(sentences: Sequence[AnnotatedSentence],
                        preferences: Optional[UserPreferences] = None) -> List[str]:
    """
    Pick sentences that read like product description.

    Short sentences (40 chars or fewer) and navigation/review boilerplate are
    dropped. The rest are ranked by how many evaluation criteria they mention.
    """
    descriptions = [
        sentence.text for sentence in sentences
        if sentence.text
        and len(sentence.text) > MIN_DESCRIPTION_LENGTH
        and not is_boilerplate(sentence.text)
    ]

    if preferences and preferences.evaluation_criteria:
        descriptions = rank_descriptions(descriptions, preferences.evaluation_criteria)

    return descriptions
