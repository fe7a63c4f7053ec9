# tests/conftest.py
import pytest

from conformance.dom.builder import DOMBuilder
from conformance.dom.models import DocumentTree
from conformance.model import AuditConfig


@pytest.fixture
def config():
    """Default audit settings, independent of settings.json."""
    return AuditConfig()


@pytest.fixture
def build():
    """Parses an HTML snippet into a DocumentTree."""
    builder = DOMBuilder()

    def _build(html: str) -> DocumentTree:
        return DocumentTree(builder.parse_doc(html))

    return _build
