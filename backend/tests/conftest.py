"""
Shared fixtures
"""
import pytest_asyncio

from storage.memory_document_store import InMemoryDocumentStore
from tests.fakes import build_store


@pytest_asyncio.fixture
async def document_store() -> InMemoryDocumentStore:
    return await build_store()
