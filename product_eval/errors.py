"""
Error taxonomy for the product extraction pipeline.

Every error carries the stage it came from and whether retrying could help,
and serializes to the error contract returned by the HTTP functions:

    {'stage': 'fetch', 'message': 'HTTP error: 404', 'recoverable': False}
"""

from typing import Dict, Optional


def is_recoverable_status(status_code: Optional[int]) -> bool:
    """Rate limits and server errors are worth retrying, other statuses are not."""
    if status_code is None:
        return False
    return status_code == 429 or status_code >= 500


class PipelineError(Exception):
    """Base class for all stage failures."""

    stage = 'processing'
    recoverable = False

    def __init__(self, message: str, stage: str = None, recoverable: bool = None):
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage
        if recoverable is not None:
            self.recoverable = recoverable

    def to_dict(self) -> Dict:
        return {
            'stage': self.stage,
            'message': self.message,
            'recoverable': self.recoverable,
        }


class NetworkFailure(PipelineError):
    """Connection-level failure (DNS, refused, reset, timeout)."""

    stage = 'fetch'
    recoverable = True


class FetchFailure(PipelineError):
    """Document fetch returned a non-success HTTP status."""

    stage = 'fetch'

    def __init__(self, message: str, status_code: int, status_text: str = ''):
        super().__init__(message, recoverable=is_recoverable_status(status_code))
        self.status_code = status_code
        self.status_text = status_text


class ExtractionFailure(PipelineError):
    """Readability found no usable article text."""

    stage = 'extraction'


class ConfigurationFailure(PipelineError):
    """A required service credential is missing."""

    stage = 'configuration'


class ServiceFailure(PipelineError):
    """The annotation service returned a non-success response."""

    stage = 'annotation'

    def __init__(self, message: str, status_code: int, status_text: str = '', body: str = ''):
        super().__init__(message, recoverable=is_recoverable_status(status_code))
        self.status_code = status_code
        self.status_text = status_text
        self.body = body


class ProductExtractionError(PipelineError):
    """Raised by extract_text_from_url; wraps the failing stage's error."""

    @classmethod
    def from_stage_error(cls, error: PipelineError) -> 'ProductExtractionError':
        return cls(
            f"Failed to extract text from URL: {error.message}",
            stage=error.stage,
            recoverable=error.recoverable,
        )
