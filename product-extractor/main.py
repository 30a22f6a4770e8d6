"""
Product Extractor Cloud Function

Fetches a product page and returns a structured, preference-aware text report
for the assessment step.

Responsibilities:
- Validate the requested URL
- Run the extraction pipeline (fetch, readability, Natural Language API)
- Shape the report to the user's expertise and evaluation criteria

Does NOT:
- Generate the assessment or summary (summary-generator's job)
- Store the report (the web client keeps it in its session)
- Retry failed stages (the caller decides)
"""

import functions_framework
from urllib.parse import urlparse
import json
import logging
import os
import sys
from datetime import datetime, timezone

# Make product_eval importable when deployed from the function directory
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from product_eval import PipelineError, UserPreferences, extract_text_from_url
from product_eval.config import FETCH_TIMEOUT_SECONDS

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CORS_HEADERS = {'Access-Control-Allow-Origin': '*'}


def is_valid_url(url: str) -> bool:
    """Check that url is an absolute http(s) URL with a host."""
    if not url or not isinstance(url, str):
        return False
    parsed = urlparse(url)
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%fZ')


@functions_framework.http
def extract_product(request):
    """
    Main Cloud Function entry point.

    Expected JSON input:
    {
        "url": "https://example.com/product",
        "preferences": {
            "expertise": "advanced",
            "productTypes": ["electronics"],
            "evaluationCriteria": ["battery", "usability"]
        }
    }
    """
    # Handle CORS
    if request.method == 'OPTIONS':
        headers = {
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Methods': 'POST',
            'Access-Control-Allow-Headers': 'Content-Type',
            'Access-Control-Max-Age': '3600'
        }
        return ('', 204, headers)

    request_json = request.get_json(silent=True) or {}
    url = request_json.get('url')

    if not url:
        return (json.dumps({'error': 'URL is required'}), 400, CORS_HEADERS)

    if not is_valid_url(url):
        return (json.dumps({'error': 'Invalid URL format'}), 400, CORS_HEADERS)

    try:
        preferences = UserPreferences.from_dict(request_json.get('preferences'))
    except ValueError as e:
        logger.warning("Rejecting preferences for %s: %s", url, e)
        return (json.dumps({'error': 'Invalid preferences'}), 400, CORS_HEADERS)

    try:
        logger.info("Processing extraction request for URL: %s", url)

        text = extract_text_from_url(url, preferences, fetch_timeout=FETCH_TIMEOUT_SECONDS)

        logger.info("Extraction completed successfully for URL: %s", url)
        return (json.dumps({
            'success': True,
            'url': url,
            'text': text,
            'processed_at': utc_timestamp(),
        }), 200, CORS_HEADERS)

    except PipelineError as e:
        return (json.dumps({
            'url': url,
            'error': e.to_dict(),
        }), 500, CORS_HEADERS)

    except Exception as e:
        logger.exception("Unhandled error in extract_product")
        return (json.dumps({
            'url': url,
            'error': {
                'stage': 'processing',
                'message': str(e),
                'recoverable': False
            }
        }), 500, CORS_HEADERS)
