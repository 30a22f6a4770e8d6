"""Fetch raw HTML for a product page."""

import logging

import requests

from .config import USER_AGENT
from .errors import FetchFailure, NetworkFailure

logger = logging.getLogger(__name__)


def fetch_html(url: str, timeout: float = None, session: requests.Session = None) -> str:
    """
    Fetch a webpage and return its body as text.

    No timeout is applied unless the caller passes one.

    Raises:
        FetchFailure: the server answered with a non-2xx status
        NetworkFailure: the request never got a response
    """
    http = session or requests
    headers = {
        'User-Agent': USER_AGENT,
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    }

    try:
        response = http.get(url, headers=headers, timeout=timeout, allow_redirects=True)
    except requests.exceptions.RequestException as e:
        logger.error("Error fetching HTML from %s: %s", url, e)
        raise NetworkFailure(f"Failed to fetch content from URL: {e}") from e

    if not response.ok:
        status_text = response.reason or ''
        logger.error("Error fetching HTML from %s: HTTP %s %s", url, response.status_code, status_text)
        raise FetchFailure(
            f"Failed to fetch content from URL: Failed to fetch URL: {response.status_code} {status_text}".rstrip(),
            status_code=response.status_code,
            status_text=status_text,
        )

    return response.text
