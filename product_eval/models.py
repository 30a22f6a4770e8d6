"""
Data types passed between pipeline stages.

All of them are created fresh for each extraction and discarded afterwards.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

DETAILED_EXPERTISE_LEVELS = ('expert', 'advanced')


def _string_list(value, field_name: str) -> List[str]:
    """Coerce a JSON list field to a list of strings. Missing or null means empty."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


@dataclass(frozen=True)
class UserPreferences:
    """What the user told us during onboarding. Read-only to the pipeline."""

    expertise: Optional[str] = None
    product_types: List[str] = field(default_factory=list)
    evaluation_criteria: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> Optional['UserPreferences']:
        """
        Build preferences from a request body.

        Accepts the camelCase keys sent by the web client
        (productTypes, evaluationCriteria) as well as snake_case.

        Raises:
            ValueError: data is not an object, or a field has the wrong type
        """
        if data is None:
            return None
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            raise ValueError(f"Preferences must be an object, got {type(data).__name__}")

        expertise = data.get('expertise')
        if expertise is not None and not isinstance(expertise, str):
            raise ValueError(f"expertise must be a string, got {type(expertise).__name__}")

        product_types = _string_list(data.get('productTypes', data.get('product_types')), 'productTypes')
        criteria = _string_list(data.get('evaluationCriteria', data.get('evaluation_criteria')),
                                'evaluationCriteria')

        return cls(
            expertise=expertise,
            product_types=product_types,
            evaluation_criteria=criteria,
        )

    @property
    def is_detailed(self) -> bool:
        return self.expertise in DETAILED_EXPERTISE_LEVELS


@dataclass(frozen=True)
class AnnotatedEntity:
    name: str
    type: str
    salience: float = 0.0
    mentions: List[Dict] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict) -> 'AnnotatedEntity':
        """Build from one item of an analyzeEntities response."""
        return cls(
            name=data.get('name') or '',
            type=data.get('type') or 'UNKNOWN',
            salience=float(data.get('salience') or 0.0),
            mentions=list(data.get('mentions') or []),
        )


@dataclass(frozen=True)
class AnnotatedSentence:
    text: str

    @classmethod
    def from_api(cls, data: Dict) -> 'AnnotatedSentence':
        """Build from one item of an analyzeSyntax response."""
        text = (data.get('text') or {}).get('content') or ''
        return cls(text=text)


@dataclass
class ProductInfo:
    name: str = ''
    price: str = ''
    features: List[str] = field(default_factory=list)
    specifications: Dict[str, str] = field(default_factory=dict)
    description: str = ''
