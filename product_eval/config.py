"""
Configuration for the product evaluation pipeline.

Values are read from the environment once at import time, except API keys,
which are read on every call so a missing key is reported where it is needed.
"""

import os

USER_AGENT = os.environ.get('USER_AGENT', 'Mozilla/5.0 (compatible; ProductEvaluationBot/1.0)')

# Google Cloud Natural Language API
LANGUAGE_API_BASE_URL = os.environ.get('LANGUAGE_API_BASE_URL', 'https://language.googleapis.com/v1')

# Only this many characters of readable content are sent for annotation
ANALYSIS_EXCERPT_LENGTH = int(os.environ.get('ANALYSIS_EXCERPT_LENGTH', '5000'))

# Used by the HTTP function; the pipeline itself sets no timeout
FETCH_TIMEOUT_SECONDS = int(os.environ.get('FETCH_TIMEOUT_SECONDS', '30'))

# Gemini summary generation
GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-2.0-flash')
MIN_SUMMARY_LENGTH = 100


def get_language_api_key() -> str:
    """Return the Natural Language API key, or None if not configured."""
    return os.environ.get('GOOGLE_CLOUD_API_KEY')


def get_gemini_api_key() -> str:
    """Return the Gemini API key, or None if not configured."""
    return os.environ.get('GEMINI_API_KEY')
