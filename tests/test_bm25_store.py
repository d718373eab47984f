"""Tests for atenea/retrieval/bm25_store.py."""

import pytest

from atenea.config import settings
from atenea.retrieval.bm25_store import BM25Store, open_bm25_store


def test_default_index_dir_comes_from_settings(monkeypatch, tmp_path):
    missing = tmp_path / "bm25_index"
    monkeypatch.setattr(settings, "bm25_index_dir", str(missing))
    with pytest.raises(FileNotFoundError, match="bm25_index"):
        BM25Store()


def test_missing_index_disables_full_text(tmp_path):
    assert open_bm25_store(tmp_path / "missing") is None
