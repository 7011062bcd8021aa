# File: tests/test_dispatcher.py
import asyncio
import json
import math

import pytest

from conftest import make_page
from llms_scout.dispatcher import BatchDispatcher
from llms_scout.report import CollectingGenerator, JsonBatchWriter, OutlineGenerator


@pytest.mark.asyncio()
@pytest.mark.parametrize("total,size", [(7, 3), (6, 3), (1, 5), (10, 1)])
async def test_batches_partition_pages_in_order(total, size):
    generator = CollectingGenerator()
    dispatcher = BatchDispatcher(generator, batch_size=size)
    pages = [make_page(f"https://example.com/p{i}") for i in range(total)]
    for page in pages:
        await dispatcher.accept([page])
    await dispatcher.flush()
    await dispatcher.close()

    assert len(dispatcher.batches) == math.ceil(total / size)
    assert all(len(b) == size for b in dispatcher.batches[:-1])
    flattened = [p.url for b in dispatcher.batches for p in b.pages]
    assert flattened == [p.url for p in pages]
    assert [payload["batch"] for payload in generator.payloads] == list(range(1, len(dispatcher.batches) + 1))


@pytest.mark.asyncio()
async def test_duplicates_and_empty_flush():
    dispatcher = BatchDispatcher(CollectingGenerator(), batch_size=2)
    page = make_page("https://example.com/a")
    await dispatcher.accept([page, page])
    await dispatcher.flush()
    await dispatcher.flush()
    assert len(dispatcher.batches) == 1
    assert len(dispatcher.batches[0]) == 1


@pytest.mark.asyncio()
async def test_generator_errors_do_not_propagate():
    class Broken:
        async def generate(self, batch_payload):
            raise RuntimeError("quota exceeded")

    dispatcher = BatchDispatcher(Broken(), batch_size=1)
    await dispatcher.accept([make_page("https://example.com/a")])
    assert dispatcher.errors and "quota exceeded" in dispatcher.errors[0]
    assert dispatcher.generated == []


@pytest.mark.asyncio()
async def test_concurrent_dispatch_does_not_block():
    release = asyncio.Event()
    seen = []

    class Slow:
        async def generate(self, batch_payload):
            await release.wait()
            seen.append(batch_payload["batch"])
            return "done"

    dispatcher = BatchDispatcher(Slow(), batch_size=1, concurrent=True)
    await asyncio.wait_for(dispatcher.accept([make_page("https://example.com/a")]), timeout=1)
    assert seen == []
    release.set()
    await dispatcher.close()
    assert seen == [1]
    assert dispatcher.generated == ["done"]


@pytest.mark.asyncio()
async def test_cancel_stops_pending_generations():
    started = []

    class Stuck:
        async def generate(self, batch_payload):
            started.append(asyncio.current_task())
            await asyncio.Event().wait()

    dispatcher = BatchDispatcher(Stuck(), batch_size=1, concurrent=True)
    await dispatcher.accept([make_page("https://example.com/a"), make_page("https://example.com/b")])
    await asyncio.sleep(0)
    assert len(started) == 2

    await asyncio.wait_for(dispatcher.cancel(), timeout=1)
    assert all(task.cancelled() for task in started)
    assert dispatcher.generated == []
    # nothing left to collect
    await asyncio.wait_for(dispatcher.close(), timeout=1)


def test_invalid_batch_size():
    with pytest.raises(ValueError):
        BatchDispatcher(CollectingGenerator(), batch_size=0)


@pytest.mark.asyncio()
async def test_json_batch_writer(tmp_path):
    dispatcher = BatchDispatcher(JsonBatchWriter(tmp_path), batch_size=2)
    await dispatcher.accept([make_page("https://example.com/a"), make_page("https://example.com/b")])
    path = tmp_path / "batch-0001.json"
    assert dispatcher.generated == [str(path)]
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["size"] == 2
    assert [p["url"] for p in data["pages"]] == ["https://example.com/a", "https://example.com/b"]


@pytest.mark.asyncio()
async def test_outline_generator(tmp_path):
    generator = OutlineGenerator("Acme", "Acme builds rockets", out_dir=tmp_path)
    dispatcher = BatchDispatcher(generator, batch_size=5)
    await dispatcher.accept(
        [
            make_page("https://example.com/about"),
            make_page("https://docs.example.com/start", is_documentation=True),
        ]
    )
    await dispatcher.flush()
    text = dispatcher.generated[0]
    assert text.startswith("# Acme")
    assert "> Acme builds rockets" in text
    assert "## Documentation" in text
    assert "(https://docs.example.com/start)" in text
    assert "## Pages" in text
    assert text.index("## Documentation") < text.index("(https://example.com/about)")
    assert (tmp_path / "llms-0001.md").read_text(encoding="utf-8") == text
