"""
Pytest configuration file for test suite

This file is automatically loaded by pytest before running tests.
It configures the Python path and provides the shared store fixtures.
"""

import sys
import uuid
from pathlib import Path

import pytest

# Add src directory to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


@pytest.fixture
def document_store():
    """Fresh in-memory document store per test"""
    from setstore.infra_layer.adapters.out.persistence.document_store.in_memory_document_store import (
        InMemoryDocumentStore,
    )

    return InMemoryDocumentStore()


@pytest.fixture
def repository(document_store):
    """Set store repository over the in-memory document store"""
    from setstore.infra_layer.adapters.out.persistence.repository.set_store_repository import (
        SetStoreRepository,
    )

    return SetStoreRepository(document_store)


@pytest.fixture
def bucket():
    """Generate unique test bucket"""
    return f"test_bucket_{uuid.uuid4().hex[:8]}"
