"""
Tests for content splitting, loading, batched embedding and IngestionService.
"""
import asyncio
import json

import pytest

from core.exceptions import IngestionError
from domain.rag.embedding.batch_processor import BatchProcessor
from domain.rag.ingestion.loader import load_content_items
from domain.rag.ingestion.splitter import TextSplitter
from domain.rag.ingestion.types import ContentItem
from scripts.ingest_documents import main as ingest_main
from services.ingestion_service import IngestionService
from storage.memory_document_store import InMemoryDocumentStore
from tests.fakes import FakeEmbeddingClient, basis


class TestTextSplitter:
    """Test TextSplitter.split()."""

    def test_short_content_is_one_chunk(self):
        chunks = TextSplitter(100).split(ContentItem(content="An AHU conditions air.", type_name="ahu"))

        assert len(chunks) == 1
        assert chunks[0].content == "An AHU conditions air."
        assert chunks[0].metadata["total_chunks"] == 1

    def test_long_content_overlaps_by_ten_percent(self):
        chunks = TextSplitter(100).split(ContentItem(content="x" * 250))

        # windows: 0-100, 90-190, 180-250
        assert [(c.chunk_start, c.chunk_end) for c in chunks] == [(0, 100), (90, 190), (180, 250)]
        assert [c.chunk_index for c in chunks] == [0, 1, 2]
        assert all(c.total_chunks == 3 for c in chunks)

    def test_overlap_is_capped(self):
        splitter = TextSplitter(2000)

        assert splitter.overlap == 100
        chunks = splitter.split(ContentItem(content="y" * 4000))
        assert chunks[1].chunk_start == 1900

    def test_metadata_carries_item_metadata(self):
        chunk = TextSplitter(50).split(ContentItem(content="Co2Sensor", metadata={"source": "ph"}))[0]

        assert chunk.metadata["source"] == "ph"
        assert chunk.metadata["chunk_size"] == 50

    def test_empty_content_gives_no_chunks(self):
        assert TextSplitter(100).split(ContentItem(content="")) == []

    def test_chunk_size_must_be_positive(self):
        with pytest.raises(IngestionError):
            TextSplitter(0)


class TestLoadContentItems:
    """Test load_content_items()."""

    def test_loads_json_and_text_files(self, tmp_path):
        (tmp_path / "specs.json").write_text(json.dumps([
            {"content": "A Co2Sensor measures CO2.", "type_name": "co2Sensor", "library_name": "ph.points"},
        ]))
        (tmp_path / "ph.points").mkdir()
        (tmp_path / "ph.points" / "sensors.xeto").write_text("Co2Sensor: Sensor")
        (tmp_path / "ignored.pdf").write_text("binary")

        items = load_content_items([tmp_path])

        assert len(items) == 2
        by_path = {item.file_path: item for item in items}
        xeto = by_path[str(tmp_path / "ph.points" / "sensors.xeto")]
        assert xeto.library_name == "ph.points"
        assert by_path[str(tmp_path / "specs.json")].type_name == "co2Sensor"

    def test_json_object_with_items(self, tmp_path):
        path = tmp_path / "docs.json"
        path.write_text(json.dumps({"items": [{"content": "one"}, {"content": "two"}]}))

        assert [item.content for item in load_content_items([path])] == ["one", "two"]

    def test_missing_path_raises(self, tmp_path):
        with pytest.raises(IngestionError):
            load_content_items([tmp_path / "missing.md"])

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(IngestionError):
            load_content_items([path])


class TestBatchProcessor:
    """Test BatchProcessor."""

    @pytest.mark.asyncio
    async def test_process_in_batches_keeps_order(self):
        processor = BatchProcessor(batch_size=3)
        batches = []

        async def double(batch):
            batches.append(list(batch))
            return [x * 2 for x in batch]

        results = await processor.process_in_batches(list(range(7)), double, show_progress=False)

        assert results == [0, 2, 4, 6, 8, 10, 12]
        assert batches == [[0, 1, 2], [3, 4, 5], [6]]

    @pytest.mark.asyncio
    async def test_process_batch_bounds_concurrency(self):
        processor = BatchProcessor(max_concurrent=2)
        running = 0
        peak = 0

        async def work(x):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0)
            running -= 1
            return x

        assert await processor.process_batch([1, 2, 3, 4, 5], work) == [1, 2, 3, 4, 5]
        assert peak == 2


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def embedding_clients():
    return {}


@pytest.fixture
def service(store, embedding_clients):
    def embedding_factory(model):
        embedding_clients[model] = FakeEmbeddingClient(model, fail=model == "gemini-embedding-exp-03-07")
        return embedding_clients[model]

    return IngestionService(
        store,
        embedding_client_factory=embedding_factory,
        batch_size=2,
        show_progress=False,
    )


ITEMS = [
    ContentItem(content="A Co2Sensor measures carbon dioxide.", type_name="co2Sensor", library_name="ph.points"),
    ContentItem(content="An AHU is an air handling unit.", type_name="ahu", library_name="ph.equips"),
    ContentItem(content="Pressure sensors measure static pressure.", type_name="pressureSensor"),
]


class TestIngestionService:
    """Test IngestionService.ingest()."""

    @pytest.mark.asyncio
    async def test_stores_each_model_in_its_shard(self, service, store):
        result = await service.ingest(ITEMS, "xeto", ["text-embedding-3-small", "gemini-embedding-001"])

        assert result["documents_stored"] == 6
        assert result["by_model"] == {"text-embedding-3-small": 3, "gemini-embedding-001": 3}
        assert result["failed"] == []
        assert await store.count_documents(1536, "xeto") == 3
        assert await store.count_documents(768, "xeto") == 3

    @pytest.mark.asyncio
    async def test_documents_keep_item_fields_and_chunk_metadata(self, service, store):
        await service.ingest(ITEMS[:1], "xeto", ["text-embedding-3-small"])

        hits = await store.vector_search(basis(1.0), "xeto", 5, 1536)
        assert hits[0].type_name == "co2Sensor"
        assert hits[0].library_name == "ph.points"
        assert hits[0].metadata["embedding_model"] == "text-embedding-3-small"
        assert hits[0].metadata["embedding_dimensions"] == 1536
        assert hits[0].metadata["chunk_index"] == 0

    @pytest.mark.asyncio
    async def test_every_chunk_size_is_stored(self, service, store):
        result = await service.ingest(
            [ContentItem(content="z" * 150)], "markdown", ["text-embedding-3-small"], chunk_sizes=[100, 1000]
        )

        # 2 chunks at 100 chars + 1 chunk at 1000 chars
        assert result["documents_stored"] == 3
        assert await store.count_documents(1536, "markdown") == 3

    @pytest.mark.asyncio
    async def test_embeds_in_batches(self, service, embedding_clients):
        await service.ingest(ITEMS, "xeto", ["text-embedding-3-small"])

        assert len(embedding_clients["text-embedding-3-small"].calls) == 3

    @pytest.mark.asyncio
    async def test_failed_models_are_recorded_and_others_continue(self, service, store):
        result = await service.ingest(
            ITEMS, "xeto", ["gemini-embedding-exp-03-07", "mistral-embed", "text-embedding-3-large"]
        )

        assert result["by_model"]["text-embedding-3-large"] == 3
        assert {f["embedding_model"] for f in result["failed"]} == {"gemini-embedding-exp-03-07", "mistral-embed"}
        assert await store.count_documents(3072) == 3
        assert await store.count_documents(768) == 0

    @pytest.mark.asyncio
    async def test_unknown_content_type_raises(self, service):
        with pytest.raises(IngestionError):
            await service.ingest(ITEMS, "pdf", ["text-embedding-3-small"])

    @pytest.mark.asyncio
    async def test_close_closes_embedding_clients(self, service, embedding_clients):
        await service.ingest(ITEMS[:1], "xeto", ["text-embedding-3-small"])

        await service.close()

        assert embedding_clients["text-embedding-3-small"].closed


class TestDocumentStats:
    """Test BaseDocumentStore.get_stats()."""

    @pytest.mark.asyncio
    async def test_counts_per_shard_and_content_type(self, document_store):
        stats = await document_store.get_stats(["xeto", "markdown"])

        assert stats["documents"] == 6
        assert stats["shards"]["documents_1536"] == {"total": 5, "by_content_type": {"xeto": 4, "markdown": 1}}
        assert stats["shards"]["documents_768"] == {"total": 1, "by_content_type": {"xeto": 1, "markdown": 0}}
        assert stats["shards"]["documents_3072"]["total"] == 0


class TestIngestCommand:
    """Test the ingest_documents command line."""

    def test_paths_and_content_type_required(self, capsys):
        assert ingest_main([]) == 2
        assert "required" in capsys.readouterr().err
