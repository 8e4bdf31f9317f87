"""Tests for docrender.batch."""

from __future__ import annotations

import threading

import pytest

from docrender.batch import BatchRenderer
from docrender.engine import RenderingEngine
from docrender.errors import GenerationFailure, InvalidInput
from docrender.generators.markdown import MarkdownGenerator
from tests._fixtures.recording import RecordingGenerator


def _entities():
    return [
        {"header": "Alpha", "member_groups": [{"type": "instance", "members": ["run"]}]},
        {"header": "Broken", "info_items": [{"type": "unknown", "value": "x"}]},
        None,
        {"header": "Gamma"},
    ]


def test_batch_continues_past_failures() -> None:
    renderer = BatchRenderer(lambda: RenderingEngine(MarkdownGenerator()))

    result = renderer.render_objects(_entities())

    assert sorted(result.outputs) == ["Alpha", "Gamma"]
    assert result.outputs["Alpha"].startswith("# Alpha Reference")
    assert not result.ok
    assert [failure.entity for failure in result.failures] == ["Broken", "#2"]
    assert all(isinstance(failure.error, InvalidInput) for failure in result.failures)


def test_batch_reuses_one_engine_per_thread() -> None:
    created = []

    def factory() -> RenderingEngine:
        engine = RenderingEngine(RecordingGenerator())
        created.append(engine)
        return engine

    BatchRenderer(factory).render_objects([{"header": "A"}, {"header": "B"}])

    assert len(created) == 1


def test_batch_with_workers_uses_separate_engines() -> None:
    engines = {}
    lock = threading.Lock()

    def factory() -> RenderingEngine:
        engine = RenderingEngine(RecordingGenerator(), last_updated="now")
        with lock:
            engines.setdefault(threading.get_ident(), []).append(engine)
        return engine

    entities = [{"header": f"Entity{i}"} for i in range(20)]
    result = BatchRenderer(factory, workers=4).render_objects(entities)

    assert result.ok
    assert len(result.outputs) == 20
    assert result.outputs["Entity7"] == "object_header Entity7\nobject_footer now\n"
    assert all(len(per_thread) == 1 for per_thread in engines.values())


def test_batch_index_reports_failure(index_data) -> None:
    class BrokenIndex(RecordingGenerator):
        def append_index_item(self, ctx, item, index):
            raise GenerationFailure("no links")

    ok = BatchRenderer(lambda: RenderingEngine(RecordingGenerator())).render_index(index_data)
    failed = BatchRenderer(lambda: RenderingEngine(BrokenIndex())).render_index(index_data)

    assert list(ok.outputs) == ["Project Reference"]
    assert failed.outputs == {}
    assert failed.failures[0].entity == "Project Reference"


def test_batch_requires_a_worker() -> None:
    with pytest.raises(ValueError):
        BatchRenderer(lambda: RenderingEngine(RecordingGenerator()), workers=0)
