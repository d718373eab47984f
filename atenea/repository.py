"""Document store plus in-memory records of analyses, history and arguments."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Protocol

from pydantic import ValidationError as PydanticValidationError

from atenea.config import settings
from atenea.models.analysis import AnalysisResult, CitedTesis, GeneratedArgument, HistoryEntry
from atenea.models.document import Document
from atenea.models.scoring import ScoredDocument
from atenea.utils.text import normalize_text

logger = logging.getLogger(__name__)

HISTORY_TITLE_LENGTH = 80


def load_documents(path: Path) -> Iterator[Document]:
    """Yield one Document per JSON line; malformed records are logged and skipped."""
    with path.open("r", encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            if not line.strip():
                continue
            try:
                yield Document(**json.loads(line))
            except (json.JSONDecodeError, PydanticValidationError, ValueError) as exc:
                logger.warning("Skipping record at %s:%d: %s", path, line_number, exc)


class Repository(Protocol):
    def get_document(self, document_id: str) -> Optional[Document]: ...

    def search_documents(self, query: Optional[str], limit: int) -> List[Document]: ...

    def all_documents(self) -> List[Document]: ...

    def save_analysis(self, analysis: AnalysisResult) -> None: ...

    def get_analysis(self, analysis_id: str) -> Optional[AnalysisResult]: ...

    def get_scored_document(
        self, document_id: str, analysis_id: Optional[str] = None
    ) -> Optional[ScoredDocument]: ...

    def list_history(self) -> List[HistoryEntry]: ...

    def save_argument(self, argument: GeneratedArgument) -> None: ...


class InMemoryRepository:
    """Read-only corpus plus per-process analysis records guarded by one lock."""

    def __init__(self, documents: Iterable[Document] = ()) -> None:
        self._documents: Dict[str, Document] = {}
        for document in documents:
            if document.id in self._documents:
                logger.warning("Duplicate document id %s; keeping the first record", document.id)
                continue
            self._documents[document.id] = document
        self._analyses: Dict[str, AnalysisResult] = {}
        self._history: Dict[str, HistoryEntry] = {}
        self._arguments: Dict[str, GeneratedArgument] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_jsonl(cls, path: Optional[Path] = None) -> "InMemoryRepository":
        path = Path(path or settings.corpus_path_obj)
        if not path.exists():
            logger.warning("Corpus file %s does not exist; starting with an empty store.", path)
            return cls()
        repository = cls(load_documents(path))
        logger.info("Loaded %d documents from %s", len(repository._documents), path)
        return repository

    def __len__(self) -> int:
        return len(self._documents)

    def get_document(self, document_id: str) -> Optional[Document]:
        return self._documents.get(document_id)

    def all_documents(self) -> List[Document]:
        return list(self._documents.values())

    def search_documents(self, query: Optional[str], limit: int = 20) -> List[Document]:
        """Substring search over title, abstract and subject tags."""
        documents = self.all_documents()
        if query:
            needle = normalize_text(query)
            documents = [
                doc
                for doc in documents
                if needle in normalize_text(doc.title)
                or needle in normalize_text(doc.abstract)
                or needle in normalize_text(doc.materias)
            ]
        return documents[:limit]

    def save_analysis(self, analysis: AnalysisResult) -> None:
        entry = HistoryEntry(
            id=analysis.id,
            titulo=analysis.problema_juridico[:HISTORY_TITLE_LENGTH],
            descripcion=analysis.descripcion,
            problema_juridico=analysis.problema_juridico,
            tesis_usadas=[CitedTesis(id=doc.id, title=doc.title) for doc in analysis.tesis_relevantes],
            created_at=analysis.created_at,
        )
        with self._lock:
            self._analyses[analysis.id] = analysis
            self._history[analysis.id] = entry

    def get_analysis(self, analysis_id: str) -> Optional[AnalysisResult]:
        return self._analyses.get(analysis_id)

    def get_scored_document(
        self, document_id: str, analysis_id: Optional[str] = None
    ) -> Optional[ScoredDocument]:
        """The annotated copy of a document from an analysis, newest analysis first."""
        with self._lock:
            if analysis_id is not None:
                candidates = [self._analyses[analysis_id]] if analysis_id in self._analyses else []
            else:
                candidates = sorted(
                    self._analyses.values(), key=lambda item: item.created_at, reverse=True
                )
        for analysis in candidates:
            for scored in analysis.tesis_relevantes:
                if scored.id == document_id:
                    return scored
        return None

    def list_history(self) -> List[HistoryEntry]:
        with self._lock:
            entries = list(self._history.values())
        return sorted(entries, key=lambda entry: entry.created_at, reverse=True)

    def save_argument(self, argument: GeneratedArgument) -> None:
        """Store the argument and attach it to the newest history entry that cites its tesis."""
        with self._lock:
            self._arguments[argument.id] = argument
            entries = sorted(self._history.values(), key=lambda entry: entry.created_at, reverse=True)
            for entry in entries:
                if any(cited.id == argument.tesis_id for cited in entry.tesis_usadas):
                    entry.argumentos_generados.append(argument)
                    break

    def get_argument(self, argument_id: str) -> Optional[GeneratedArgument]:
        return self._arguments.get(argument_id)
