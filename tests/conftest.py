"""
Shared pytest fixtures for the product evaluation tests.
"""

import pytest
import sys
import importlib.util
from pathlib import Path

from product_eval.models import AnnotatedEntity, AnnotatedSentence, UserPreferences

# Project root for finding Cloud Function modules
PROJECT_ROOT = Path(__file__).parent.parent


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load Cloud Function modules with unique names at module load time
_product_extractor_module = _load_module_from_path(
    'product_extractor_main',
    PROJECT_ROOT / 'product-extractor' / 'main.py'
)

_summary_generator_module = _load_module_from_path(
    'summary_generator_main',
    PROJECT_ROOT / 'summary-generator' / 'main.py'
)


# ============================================================================
# Cloud Function Fixtures
# ============================================================================

@pytest.fixture
def extract_product():
    """Returns main entry point from product-extractor."""
    return _product_extractor_module.extract_product


@pytest.fixture
def is_valid_url():
    """Returns is_valid_url function from product-extractor."""
    return _product_extractor_module.is_valid_url


@pytest.fixture
def generate_summary():
    """Returns main entry point from summary-generator."""
    return _summary_generator_module.generate_summary


@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, json_data=None, method='POST'):
            self._json = json_data
            self.method = method
            self.data = b''

        def get_json(self, force=False, silent=False):
            return self._json

    return MockRequest


@pytest.fixture
def language_api_key(monkeypatch):
    """Configures a Natural Language API key for the duration of a test."""
    monkeypatch.setenv('GOOGLE_CLOUD_API_KEY', 'test-language-key')
    return 'test-language-key'


@pytest.fixture
def no_language_api_key(monkeypatch):
    """Removes the Natural Language API key for the duration of a test."""
    monkeypatch.delenv('GOOGLE_CLOUD_API_KEY', raising=False)


# ============================================================================
# Sample Data
# ============================================================================

@pytest.fixture
def sample_product_html():
    """Raw HTML of a product page with navigation and footer boilerplate."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Acme Widget Pro | Acme Store</title>
    </head>
    <body>
        <nav><a href="/">Home</a> <a href="/shop">Shop</a> <a href="/cart">Cart</a></nav>
        <article>
            <h1>Acme Widget Pro</h1>
            <p>The Acme Widget Pro is a compact smart speaker with long lasting battery performance
            and excellent usability for everyday listening at home or on the road.</p>
            <p>It pairs with any phone in seconds, supports multi-room audio, and ships with a two
            year warranty that covers parts and labour for peace of mind.</p>
            <p>Battery life is rated at eight hours, the speaker weighs 250 grams, and it connects over
            Bluetooth 5.2 and Wi-Fi 6 for reliable streaming around the house.</p>
        </article>
        <footer>Copyright Acme</footer>
    </body>
    </html>
    """


@pytest.fixture
def empty_body_html():
    """HTML that readability reduces to no text at all."""
    return "<html><head><title>Nothing here</title></head><body></body></html>"


@pytest.fixture
def entities_api_response():
    """Sample analyzeEntities response."""
    return {
        "entities": [
            {"name": "Acme Widget Pro", "type": "CONSUMER_GOOD", "salience": 0.42,
             "mentions": [{"text": {"content": "Acme Widget Pro"}, "type": "PROPER"}]},
            {"name": "$299.99", "type": "PRICE", "salience": 0.01, "mentions": [{}]},
            {"name": "long lasting battery performance", "type": "OTHER", "salience": 0.08,
             "mentions": [{}]},
            {"name": "multi-room audio support", "type": "OTHER", "salience": 0.05,
             "mentions": [{}]},
            {"name": "RAM: 8GB", "type": "OTHER", "salience": 0.03, "mentions": [{}]},
            {"name": "Acme", "type": "ORGANIZATION", "salience": 0.2, "mentions": [{}]},
        ],
        "language": "en",
    }


@pytest.fixture
def syntax_api_response():
    """Sample analyzeSyntax response (tokens trimmed)."""
    sentences = [
        "The Acme Widget Pro is a compact smart speaker with great usability.",
        "You can click here to add it to your cart today and save.",
        "Short one.",
        "Its battery lasts a full working day on a single charge indoors.",
        "It ships with a two year warranty that covers parts and labour.",
    ]
    return {
        "sentences": [
            {"text": {"content": text, "beginOffset": 0}, "sentiment": None}
            for text in sentences
        ],
        "tokens": [],
        "language": "en",
    }


@pytest.fixture
def make_entity():
    """Factory for AnnotatedEntity with sensible defaults."""
    def _make(name, type='OTHER', salience=0.0, mentions=None):
        return AnnotatedEntity(
            name=name,
            type=type,
            salience=salience,
            mentions=[{}] if mentions is None else mentions,
        )
    return _make


@pytest.fixture
def make_sentences():
    """Factory turning strings into AnnotatedSentence objects."""
    def _make(*texts):
        return [AnnotatedSentence(text=text) for text in texts]
    return _make


@pytest.fixture
def expert_preferences():
    return UserPreferences(
        expertise='expert',
        product_types=['electronics'],
        evaluation_criteria=['battery', 'usability'],
    )


@pytest.fixture
def beginner_preferences():
    return UserPreferences(
        expertise='beginner',
        product_types=['electronics'],
        evaluation_criteria=['battery'],
    )


@pytest.fixture
def sample_criteria():
    """Assessment criteria as sent by the web client."""
    return [
        {"name": "Quality", "rating": 8,
         "notes": "Excellent build quality with premium materials."},
        {"name": "Value", "rating": 7,
         "notes": "Priced at a premium, but the quality justifies the cost."},
        {"name": "Innovation", "rating": 9,
         "notes": "Several features not found in competing products."},
        {"name": "Usability", "rating": 6,
         "notes": "Advanced features have a steep learning curve."},
    ]
