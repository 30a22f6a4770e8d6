"""
End-to-end product text extraction.

fetch HTML -> readable content -> entity + syntax annotation (concurrent)
-> classify entities / select descriptions -> rank -> assemble report

Any stage failure aborts the run. The caller gets either the full report or
a single ProductExtractionError naming the failing stage; never a partial
report.
"""

import logging
from typing import Dict, Union

from . import config
from .content_utils import extract_main_content
from .errors import PipelineError, ProductExtractionError
from .fetch_utils import fetch_html
from .language_utils import analyze_document
from .models import UserPreferences
from .product_utils import classify_entities, select_descriptions
from .report_utils import assemble_report

logger = logging.getLogger(__name__)


def extract_text_from_url(url: str,
                          preferences: Union[UserPreferences, Dict, None] = None,
                          api_key: str = None,
                          fetch_timeout: float = None,
                          excerpt_length: int = None) -> str:
    """
    Extract a structured, preference-aware product report from a URL.

    Args:
        url: Absolute URL of the product page (validated by the caller)
        preferences: UserPreferences or the raw dict from the client
        api_key: Natural Language API key (defaults to GOOGLE_CLOUD_API_KEY)
        fetch_timeout: Timeout for the page fetch, none by default
        excerpt_length: Characters of content sent for annotation

    Returns:
        The report text

    Raises:
        ProductExtractionError: wrapping the stage error as __cause__
    """
    preferences = UserPreferences.from_dict(preferences)
    if excerpt_length is None:
        excerpt_length = config.ANALYSIS_EXCERPT_LENGTH

    logger.info("Extracting text from URL: %s", url)
    logger.info("Using user preferences: %s", preferences)

    try:
        html = fetch_html(url, timeout=fetch_timeout)
        logger.info("HTML content fetched successfully (%d chars)", len(html))

        main_content = extract_main_content(html)
        logger.info("Main content extracted successfully (%d chars)", len(main_content))

        excerpt = main_content[:excerpt_length]
        entities, sentences = analyze_document(excerpt, api_key=api_key)
        logger.info("Analyzed %d entities and %d sentences", len(entities), len(sentences))
    except PipelineError as e:
        logger.error("Extraction failed at stage '%s': %s", e.stage, e.message)
        raise ProductExtractionError.from_stage_error(e) from e

    product_info = classify_entities(entities, preferences)
    descriptions = select_descriptions(sentences, preferences)
    report = assemble_report(product_info, descriptions, main_content, preferences)

    logger.info("Text extraction completed successfully")
    return report
