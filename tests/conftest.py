"""Shared fixtures for devtrans tests."""

import pytest

import devtrans.pipeline as pipeline_module
from devtrans.dictionary import StaticTermSource, TermSource, TermRecord
from devtrans.errors import DictionarySourceError
from devtrans.pipeline import PipelineConfig, TranslationPipeline

TEST_TERMS = [
    {"term": "fetch", "translation": "obtener", "aliases": ["request"]},
    {"term": "user", "translation": "usuario", "aliases": []},
    {"term": "welcome", "translation": "bienvenido", "aliases": []},
    {"term": "state", "translation": "estado", "aliases": []},
    {"term": "data", "translation": "datos", "aliases": []},
    {"term": "state of the art", "translation": "état de l'art", "aliases": []},
]


class CountingSource(TermSource):
    """Term source that records how often it was read."""

    def __init__(self, records=None, fail_times: int = 0):
        self.records = [TermRecord.from_dict(r) for r in (records or TEST_TERMS)]
        self.calls = 0
        self.fail_times = fail_times

    @property
    def name(self) -> str:
        return "counting"

    def fetch_terms(self):
        self.calls += 1
        if self.calls <= self.fail_times:
            raise DictionarySourceError("backing store unavailable")
        return list(self.records)


@pytest.fixture
def source():
    return StaticTermSource(TEST_TERMS)


@pytest.fixture
def pipeline(source):
    """Pipeline over the test terms, without the built-in vocabulary."""
    return TranslationPipeline(config=PipelineConfig(use_defaults=False), source=source)


@pytest.fixture
def default_pipeline(monkeypatch):
    """Isolate the process-wide pipeline for module-level API tests."""
    monkeypatch.setattr(pipeline_module, "_default_pipeline", None)
    yield
    monkeypatch.setattr(pipeline_module, "_default_pipeline", None)
