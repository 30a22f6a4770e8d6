"""
Google Cloud Natural Language API client.

Two calls are made over the same excerpt of readable content:
- analyzeEntities: named entities with type, salience and mentions
- analyzeSyntax: sentence segmentation (tokens are ignored)

The calls don't depend on each other, so analyze_document() issues them
concurrently and waits for both.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Tuple

import requests

from . import config
from .errors import ConfigurationFailure, NetworkFailure, ServiceFailure
from .models import AnnotatedEntity, AnnotatedSentence

logger = logging.getLogger(__name__)


def build_document_request(text: str) -> Dict:
    """Request body shared by both endpoints."""
    return {
        'document': {
            'type': 'PLAIN_TEXT',
            'content': text,
        },
        'encodingType': 'UTF8',
    }


def _call_language_api(method: str, label: str, text: str, api_key: str = None,
                       session: requests.Session = None) -> Dict:
    """POST to documents:<method> and return the decoded JSON body."""
    api_key = api_key or config.get_language_api_key()
    if not api_key:
        raise ConfigurationFailure(f"Failed to {label}: Google Cloud API key is not configured")

    http = session or requests
    url = f"{config.LANGUAGE_API_BASE_URL}/documents:{method}"

    try:
        response = http.post(
            url,
            params={'key': api_key},
            headers={'Content-Type': 'application/json'},
            json=build_document_request(text),
        )
    except requests.exceptions.RequestException as e:
        logger.error("Error calling %s: %s", method, e)
        raise NetworkFailure(f"Failed to {label}: {e}", stage='annotation') from e

    if not response.ok:
        status_text = response.reason or ''
        body = response.text
        logger.error("Error calling %s: HTTP %s %s", method, response.status_code, body[:200])
        raise ServiceFailure(
            f"Failed to {label}: Google Cloud API error: {response.status_code} {status_text} - {body}",
            status_code=response.status_code,
            status_text=status_text,
            body=body,
        )

    try:
        data = response.json()
    except ValueError as e:
        logger.error("Error calling %s: response is not JSON: %s", method, response.text[:200])
        raise ServiceFailure(
            f"Failed to {label}: invalid JSON response from Google Cloud API: {e}",
            status_code=response.status_code,
            status_text=response.reason or '',
            body=response.text,
        ) from e

    if not isinstance(data, dict):
        raise ServiceFailure(
            f"Failed to {label}: unexpected response from Google Cloud API: {response.text[:200]}",
            status_code=response.status_code,
            status_text=response.reason or '',
            body=response.text,
        )

    return data


def analyze_entities(text: str, api_key: str = None, session: requests.Session = None) -> List[AnnotatedEntity]:
    """Annotate entities in text. Order is as returned by the service."""
    data = _call_language_api('analyzeEntities', 'analyze entities', text, api_key, session)
    return [AnnotatedEntity.from_api(item) for item in data.get('entities') or []]


def analyze_syntax(text: str, api_key: str = None, session: requests.Session = None) -> List[AnnotatedSentence]:
    """Split text into sentences, in document order."""
    data = _call_language_api('analyzeSyntax', 'analyze syntax', text, api_key, session)
    return [AnnotatedSentence.from_api(item) for item in data.get('sentences') or []]


def analyze_document(text: str, api_key: str = None) -> Tuple[List[AnnotatedEntity], List[AnnotatedSentence]]:
    """
    Run entity and syntax analysis concurrently.

    Both calls are awaited before returning. If either fails, its error is
    raised (entity errors take precedence when both fail).
    """
    # Resolve the key once so a missing credential fails before any request
    api_key = api_key or config.get_language_api_key()
    if not api_key:
        raise ConfigurationFailure("Failed to analyze document: Google Cloud API key is not configured")

    with ThreadPoolExecutor(max_workers=2) as executor:
        entities_future = executor.submit(analyze_entities, text, api_key)
        syntax_future = executor.submit(analyze_syntax, text, api_key)
        entities = entities_future.result()
        sentences = syntax_future.result()

    return entities, sentences
