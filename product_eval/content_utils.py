"""
Readable-content extraction.

Runs readability (a port of Mozilla's Readability) over the raw HTML to keep
only the main article block, then flattens it to text with BeautifulSoup.
"""

import logging

from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from .errors import ExtractionFailure

logger = logging.getLogger(__name__)


def html_to_text(html: str) -> str:
    """Flatten an HTML fragment to text, one block per line."""
    if not html:
        return ''
    soup = BeautifulSoup(html, 'html.parser')
    return soup.get_text(separator='\n', strip=True)


def extract_main_content(html: str) -> str:
    """
    Extract the main readable text from a page.

    Raises:
        ExtractionFailure: no article could be identified or it has no text
    """
    if not html or not html.strip():
        raise ExtractionFailure("Failed to extract main content: HTML document is empty")

    try:
        document = Document(html)
        article_html = document.summary(html_partial=True)
    except Unparseable as e:
        logger.error("Error extracting main content: %s", e)
        raise ExtractionFailure(f"Failed to extract main content: {e}") from e

    text = html_to_text(article_html)
    if not text:
        logger.error("Readability produced an article with no text")
        raise ExtractionFailure("Failed to extract main content: Failed to extract main content from HTML")

    return text
