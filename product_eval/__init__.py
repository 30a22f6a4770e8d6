"""Shared product evaluation pipeline for the Cloud Functions."""

from .errors import (
    PipelineError,
    NetworkFailure,
    FetchFailure,
    ExtractionFailure,
    ConfigurationFailure,
    ServiceFailure,
    ProductExtractionError,
)

from .models import (
    UserPreferences,
    AnnotatedEntity,
    AnnotatedSentence,
    ProductInfo,
)

from .pipeline import extract_text_from_url

from .summary_utils import (
    REQUIRED_SUMMARY_SECTIONS,
    validate_criteria,
    generate_fallback_summary,
    generate_ai_summary,
    validate_summary_sections,
)

__all__ = [
    # Errors
    'PipelineError',
    'NetworkFailure',
    'FetchFailure',
    'ExtractionFailure',
    'ConfigurationFailure',
    'ServiceFailure',
    'ProductExtractionError',
    # Models
    'UserPreferences',
    'AnnotatedEntity',
    'AnnotatedSentence',
    'ProductInfo',
    # Pipeline
    'extract_text_from_url',
    # Summary generation
    'REQUIRED_SUMMARY_SECTIONS',
    'validate_criteria',
    'generate_fallback_summary',
    'generate_ai_summary',
    'validate_summary_sections',
]
