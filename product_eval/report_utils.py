"""
Report assembly.

Produces the plain-text product report handed to the assessment step.
Section depth depends on the user's expertise: expert and advanced users
get more descriptions, more features and a longer content excerpt.
"""

from typing import Dict, List, Optional, Sequence

from .models import ProductInfo, UserPreferences

UNKNOWN_PRODUCT = 'Unknown Product'
NO_DESCRIPTION = 'No description available.'
NO_FEATURES = '- No features extracted.'
NO_SPECIFICATIONS = '- No specifications extracted.'

REPORT_LIMITS = {
    'detailed': {'descriptions': 5, 'features': 10, 'excerpt': 2000},
    'standard': {'descriptions': 3, 'features': 5, 'excerpt': 1000},
}


def get_report_limits(preferences: Optional[UserPreferences]) -> Dict[str, int]:
    """Limits for the report mode selected by the user's expertise."""
    detailed = preferences is not None and preferences.is_detailed
    return REPORT_LIMITS['detailed' if detailed else 'standard']


def format_bullets(items: Sequence[str], placeholder: str) -> str:
    if not items:
        return placeholder
    return '\n'.join(f"- {item}" for item in items)


def assemble_report(product_info: ProductInfo, descriptions: Sequence[str], main_content: str,
                    preferences: Optional[UserPreferences] = None) -> str:
    """Compose the final report. Identical inputs always give identical output."""
    limits = get_report_limits(preferences)

    description = (
        '\n\n'.join(descriptions[:limits['descriptions']])
        or product_info.description
        or NO_DESCRIPTION
    )
    specifications = [f"{key}: {value}" for key, value in product_info.specifications.items()]

    lines: List[str] = [f"Product Name: {product_info.name or UNKNOWN_PRODUCT}"]
    if product_info.price:
        lines.append(f"Price: {product_info.price}")

    lines += [
        '',
        'Product Description:',
        description,
        '',
        'Key Features:',
        format_bullets(product_info.features[:limits['features']], NO_FEATURES),
        '',
        'Technical Specifications:',
        format_bullets(specifications, NO_SPECIFICATIONS),
        '',
        'Additional Information:',
        f"{main_content[:limits['excerpt']]}...",
    ]

    return '\n'.join(lines) + '\n'
