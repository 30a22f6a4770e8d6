"""
Evaluation summary generation.

Turns assessment criteria ({name, rating 0-10, notes}) into a Markdown
evaluation summary using Gemini. When Gemini is unavailable or answers with
too little text, a deterministic summary is built locally instead so the
caller always gets a usable document.
"""

import json
import logging
import re
from numbers import Number
from typing import Dict, List

import google.generativeai as genai
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from . import config

logger = logging.getLogger(__name__)

# Required sections of an evaluation summary (order matters for prompt)
REQUIRED_SUMMARY_SECTIONS = [
    'Overview',
    'Key Strengths',
    'Areas for Improvement',
    'Recommendation',
    'Overall Rating',
]

INVALID_CRITERIA_MESSAGE = "All criteria must have a name, valid rating (0-10), and notes"

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
}


def _is_valid_criterion(criterion) -> bool:
    if not isinstance(criterion, dict):
        return False
    rating = criterion.get('rating')
    # bool is a Number subclass but never a rating
    if isinstance(rating, bool) or not isinstance(rating, Number):
        return False
    return bool(criterion.get('name')) and 0 <= rating <= 10 and bool(criterion.get('notes'))


def validate_criteria(criteria) -> Dict:
    """
    Validate assessment criteria from a request body.

    Returns:
        Dict with:
            valid: bool
            errors: list - Error messages (first one is returned to the client)
    """
    errors = []

    if criteria is None:
        errors.append("Assessment criteria are required")
    elif not isinstance(criteria, list):
        errors.append("Criteria must be provided as an array")
    elif not criteria:
        errors.append("At least one assessment criterion is required")
    else:
        invalid = [c for c in criteria if not _is_valid_criterion(c)]
        if invalid:
            errors.append(INVALID_CRITERIA_MESSAGE)

    return {'valid': not errors, 'errors': errors}


def build_summary_prompt(criteria: List[Dict]) -> str:
    return f"""Based on the following assessment criteria, generate a comprehensive
evaluation summary in Markdown format. Include an overview, key strengths,
areas for improvement, a recommendation, and an overall rating.

Assessment criteria:
{json.dumps(criteria, indent=2)}

Format your response as a Markdown document with these sections:
1. Overview - A brief summary of the product based on the criteria
2. Key Strengths - At least 3 bullet points highlighting the highest-rated aspects
3. Areas for Improvement - At least 2 bullet points noting the lower-rated aspects
4. Recommendation - A concise recommendation for potential users
5. Overall Rating - A single numerical score out of 10 that represents the average with contextual weighting

Ensure the writing is balanced, evidence-based, and professional. Use Markdown formatting features like headers (# and ##), bold, and bullet points.
Focus on actionable insights rather than just restating the criteria.
"""


def generate_fallback_summary(criteria: List[Dict]) -> str:
    """
    Build a summary locally from the ratings alone.

    Overall rating is the mean rating (one decimal). Strengths are the three
    highest-rated criteria, improvements the two lowest; ties keep input order.
    """
    average = sum(c['rating'] for c in criteria) / len(criteria)
    strengths = sorted(criteria, key=lambda c: c['rating'], reverse=True)[:3]
    improvements = sorted(criteria, key=lambda c: c['rating'])[:2]

    def name_at(items, index, default):
        return items[index]['name'].lower() if len(items) > index else default

    top_notes = strengths[0]['notes'].lower() if strengths else 'positive qualities'

    lines = [
        '# Product Evaluation Summary',
        '',
        '## Overview',
        f"This product demonstrates {top_notes} with a balanced profile across assessed criteria. "
        "The evaluation highlights specific strengths while noting areas that could benefit "
        "from further development.",
        '',
        '## Key Strengths',
    ]
    lines += [f"- **{c['name']}**: {c['notes']}" for c in strengths]
    lines += ['', '## Areas for Improvement']
    lines += [f"- **{c['name']}**: {c['notes']}" for c in improvements]
    lines += [
        '',
        '## Recommendation',
        f"This product is recommended for users who prioritize {name_at(strengths, 0, 'quality')} "
        f"and {name_at(strengths, 1, 'performance')}. Potential users should weigh these advantages "
        f"against the {name_at(improvements, 0, 'limitations')} noted in this assessment.",
        '',
        f"## Overall Rating: {average:.1f}/10",
    ]
    return '\n'.join(lines)


def parse_summary_sections(summary_text: str) -> Dict[str, str]:
    """
    Parse a Markdown summary into sections keyed by "##" heading.

    A heading may carry its content inline after a colon, as in
    "## Overall Rating: 7.5/10".
    """
    if not summary_text:
        return {}

    sections = {}
    current_section = None
    current_content = []

    for line in summary_text.split('\n'):
        heading_match = re.match(r'^##\s*([^:#]+?)\s*(?::\s*(.*))?$', line.strip())
        if heading_match:
            if current_section:
                sections[current_section] = '\n'.join(current_content).strip()
            current_section = heading_match.group(1).strip()
            inline = (heading_match.group(2) or '').strip()
            current_content = [inline] if inline else []
        elif current_section:
            current_content.append(line)

    if current_section:
        sections[current_section] = '\n'.join(current_content).strip()

    return sections


def validate_summary_sections(summary_text: str, required_sections: List[str] = None) -> Dict:
    """
    Check that a summary contains every required section with content.

    Returns:
        Dict with:
            valid: bool
            sections: dict - Parsed sections
            missing: list - Required sections not found
            empty: list - Required sections found without content
            errors: list - Error messages
    """
    if required_sections is None:
        required_sections = REQUIRED_SUMMARY_SECTIONS

    result = {'valid': True, 'sections': {}, 'missing': [], 'empty': [], 'errors': []}

    if not summary_text:
        result['valid'] = False
        result['errors'].append('Summary text is missing or empty')
        result['missing'] = list(required_sections)
        return result

    sections = parse_summary_sections(summary_text)
    result['sections'] = sections
    by_lower_name = {key.lower(): value for key, value in sections.items()}

    for section_name in required_sections:
        content = by_lower_name.get(section_name.lower())
        if content is None:
            result['missing'].append(section_name)
            result['errors'].append(f"Missing required section: {section_name}")
            result['valid'] = False
        elif not content.strip():
            result['empty'].append(section_name)
            result['errors'].append(f"Section is empty: {section_name}")
            result['valid'] = False

    return result


def generate_ai_summary(criteria: List[Dict], api_key: str = None) -> Dict:
    """
    Generate an evaluation summary with Gemini, falling back to a local one.

    Returns:
        Dict with:
            summary: str - Markdown summary (never empty)
            source: 'gemini' or 'fallback'
            error: str or None - Why the fallback was used
    """
    result = {'summary': None, 'source': 'gemini', 'error': None}
    api_key = api_key or config.get_gemini_api_key()

    try:
        if not api_key:
            raise ValueError('GEMINI_API_KEY not configured')

        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(
            config.GEMINI_MODEL,
            generation_config=genai.GenerationConfig(
                temperature=0.7,
                top_k=40,
                top_p=0.95,
                max_output_tokens=2048,
            ),
            safety_settings=SAFETY_SETTINGS,
        )

        response = model.generate_content(build_summary_prompt(criteria))
        summary_text = (response.text or '').strip()

        if len(summary_text) < config.MIN_SUMMARY_LENGTH:
            raise ValueError(f"Insufficient response from Gemini ({len(summary_text)} chars)")

        validation = validate_summary_sections(summary_text)
        if not validation['valid']:
            logger.warning("Gemini summary is incomplete: %s", '; '.join(validation['errors']))

        result['summary'] = summary_text

    except Exception as e:
        # Any generation failure degrades to the local summary
        logger.error("Error generating summary with Gemini: %s", e)
        result['summary'] = generate_fallback_summary(criteria)
        result['source'] = 'fallback'
        result['error'] = str(e)

    return result
