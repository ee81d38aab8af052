"""
Tests for InMemoryDocumentStore.
"""
import pytest

from core.exceptions import UnsupportedDimensionError
from storage.base import Document, shard_table_name
from storage.memory_document_store import InMemoryDocumentStore
from tests.fakes import basis


class TestSharding:
    """Documents land in the shard matching their embedding width."""

    @pytest.mark.asyncio
    async def test_documents_are_counted_per_shard(self, document_store):
        assert await document_store.count_documents(1536) == 5
        assert await document_store.count_documents(1536, content_type="xeto") == 4
        assert await document_store.count_documents(768) == 1
        assert await document_store.count_documents(3072) == 0

    @pytest.mark.asyncio
    async def test_add_document_assigns_increasing_ids(self):
        store = InMemoryDocumentStore()

        first = await store.add_document(Document(content="a", content_type="xeto", embedding=basis(1.0)))
        second = await store.add_document(Document(content="b", content_type="xeto", embedding=basis(1.0, dim=3072)))

        assert (first, second) == (1, 2)

    @pytest.mark.asyncio
    async def test_unsupported_width_is_rejected(self):
        store = InMemoryDocumentStore()

        with pytest.raises(UnsupportedDimensionError):
            await store.add_document(Document(content="a", content_type="xeto", embedding=[1.0] * 512))

    def test_shard_table_name(self):
        assert shard_table_name(3072) == "documents_3072"
        with pytest.raises(UnsupportedDimensionError):
            shard_table_name(1024)


class TestBranchQueries:
    """Test lexical and relevance branches."""

    @pytest.mark.asyncio
    async def test_lexical_search_returns_only_matches(self, document_store):
        hits = await document_store.lexical_search("pressure | sensors", "xeto", limit=10, dimension=1536)

        assert [h.id for h in hits] == [4, 2]
        assert hits[0].score == pytest.approx(0.75)
        assert hits[1].score == pytest.approx(0.5)

    @pytest.mark.asyncio
    async def test_lexical_search_respects_limit(self, document_store):
        hits = await document_store.lexical_search("pressure | sensors", "xeto", limit=1, dimension=1536)

        assert [h.id for h in hits] == [4]

    @pytest.mark.asyncio
    async def test_relevance_prefers_type_name_matches(self, document_store):
        hits = await document_store.relevance_search("ahu", "xeto", limit=10, dimension=1536)

        assert hits[0].id == 3
        # type name (1.0) + content (0.2) -> 1.2 / 2.2
        assert hits[0].score == pytest.approx(1.2 / 2.2)
        assert len(hits) == 4

    @pytest.mark.asyncio
    async def test_vector_search_on_empty_shard(self, document_store):
        hits = await document_store.vector_search(basis(1.0, dim=3072), "xeto", limit=5, dimension=3072)

        assert hits == []
