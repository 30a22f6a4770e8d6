"""
Summary Generator Cloud Function

Turns a finished assessment into a Markdown evaluation summary.

Responsibilities:
- Validate assessment criteria ({name, rating 0-10, notes})
- Generate the summary with Gemini
- Fall back to a locally computed summary when Gemini fails

Does NOT:
- Produce the assessment ratings (the user does, in the web client)
- Store the summary
"""

import functions_framework
import json
import logging
import os
import sys
import time
import uuid

# Make product_eval importable when deployed from the function directory
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from product_eval.config import get_gemini_api_key
from product_eval.summary_utils import generate_ai_summary, validate_criteria

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CORS_HEADERS = {'Access-Control-Allow-Origin': '*'}


@functions_framework.http
def generate_summary(request):
    """
    Main Cloud Function entry point.

    Expected JSON input:
    {
        "criteria": [
            {"name": "Quality", "rating": 8, "notes": "Solid build"},
            ...
        ]
    }
    """
    if request.method == 'OPTIONS':
        headers = {
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Methods': 'POST',
            'Access-Control-Allow-Headers': 'Content-Type',
            'Access-Control-Max-Age': '3600'
        }
        return ('', 204, headers)

    request_id = str(uuid.uuid4())
    start_time = time.perf_counter()

    try:
        logger.info("[%s] Processing summary generation request", request_id)

        request_json = request.get_json(silent=True) or {}
        criteria = request_json.get('criteria')

        validation = validate_criteria(criteria)
        if not validation['valid']:
            logger.warning("[%s] Invalid criteria: %s", request_id, validation['errors'][0])
            return (json.dumps({'error': validation['errors'][0]}), 400, CORS_HEADERS)

        api_key = get_gemini_api_key()
        if not api_key:
            logger.error("[%s] Gemini API key not configured", request_id)
            return (json.dumps({'error': 'Server configuration error'}), 500, CORS_HEADERS)

        result = generate_ai_summary(criteria, api_key=api_key)
        if result['source'] == 'fallback':
            logger.warning("[%s] Using fallback summary: %s", request_id, result['error'])

        return (json.dumps({'summary': result['summary']}), 200, CORS_HEADERS)

    except Exception:
        logger.exception("[%s] Unhandled error in generate_summary", request_id)
        return (json.dumps({'error': 'Failed to generate summary'}), 500, CORS_HEADERS)

    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info("[%s] Summary generation request completed in %.2fms", request_id, duration_ms)
