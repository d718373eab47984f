"""FastAPI application entry point."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from atenea.config import settings
from atenea.errors import NotFoundError, UpstreamModelError, ValidationError
from atenea.llm.answer_generator import AnswerSynthesizer
from atenea.models.analysis import (
    AnalysisResult,
    AnalyzeRequest,
    ArgumentRequest,
    GeneratedArgument,
    HistoryEntry,
)
from atenea.models.document import Document
from atenea.models.qa import AskRequest
from atenea.repository import InMemoryRepository, Repository
from atenea.retrieval.bm25_store import open_bm25_store
from atenea.retrieval.retriever import VectorRetriever
from atenea.services.analysis import AnalysisService
from atenea.services.arguments import ArgumentService
from atenea.services.ask import AskService

logger = logging.getLogger(__name__)

DISCONNECT_POLL_SECONDS = 0.5
CLIENT_CLOSED_REQUEST = 499


async def build_ask_service(repository: Repository) -> AskService:
    """Wire the RAG pipeline; fails fast on missing keys or a mismatched index."""
    settings.require_openai_key()
    retriever = VectorRetriever(repository, bm25_store=open_bm25_store())
    await retriever.check_index()
    return AskService(retriever, AnswerSynthesizer())


@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.repository is None:
        app.state.repository = InMemoryRepository.from_jsonl()
    if app.state.ask_service is None:
        app.state.ask_service = await build_ask_service(app.state.repository)
    yield


def get_repository(request: Request) -> Repository:
    return request.app.state.repository


def get_ask_service(request: Request) -> AskService:
    return request.app.state.ask_service


def get_analysis_service(repository: Repository = Depends(get_repository)) -> AnalysisService:
    return AnalysisService(repository)


def get_argument_service(repository: Repository = Depends(get_repository)) -> ArgumentService:
    return ArgumentService(repository)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        messages = [f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()]
        return JSONResponse(status_code=400, content={"error": "Solicitud inválida", "detail": messages})

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _error(400, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error(404, f"{exc.kind} no encontrada: {exc.identifier}")

    @app.exception_handler(UpstreamModelError)
    async def upstream_handler(request: Request, exc: UpstreamModelError):
        logger.error("Upstream model failure during %s: %s", exc.operation, exc.cause)
        return _error(500, exc.user_message)


def create_app(
    repository: Optional[Repository] = None,
    ask_service: Optional[AskService] = None,
) -> FastAPI:
    logging.basicConfig(level=settings.log_level)
    app = FastAPI(
        title="Atenea",
        description="Mexican judicial precedent retrieval, ranking and cited answers",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.repository = repository
    app.state.ask_service = ask_service
    register_exception_handlers(app)

    @app.get("/health")
    def health() -> dict[str, str]:
        """Simple readiness probe."""
        return {"status": "ok"}

    @app.post("/api/analyze", response_model=AnalysisResult)
    def analyze(
        payload: AnalyzeRequest, service: AnalysisService = Depends(get_analysis_service)
    ) -> AnalysisResult:
        """Classify a case and return the ranked, annotated precedents."""
        return service.analyze(payload.descripcion, payload.rol_procesal)

    @app.get("/api/analysis/{analysis_id}", response_model=AnalysisResult)
    def get_analysis(
        analysis_id: str, repository: Repository = Depends(get_repository)
    ) -> AnalysisResult:
        analysis = repository.get_analysis(analysis_id)
        if analysis is None:
            raise NotFoundError("Análisis", analysis_id)
        return analysis

    @app.get("/api/tesis", response_model=List[Document])
    def list_tesis(
        q: Optional[str] = None,
        limit: int = Query(20, ge=1, le=200),
        repository: Repository = Depends(get_repository),
    ) -> List[Document]:
        return repository.search_documents(q, limit)

    @app.get("/api/tesis/{tesis_id}")
    def get_tesis(
        tesis_id: str,
        analysis_id: Optional[str] = Query(None, alias="analysisId"),
        repository: Repository = Depends(get_repository),
    ):
        """The annotated copy from an analysis when one exists, else the plain document."""
        scored = repository.get_scored_document(tesis_id, analysis_id)
        if scored is not None:
            return scored
        document = repository.get_document(tesis_id)
        if document is None:
            raise NotFoundError("Tesis", tesis_id)
        return document

    @app.post("/api/arguments", response_model=GeneratedArgument)
    def create_argument(
        payload: ArgumentRequest, service: ArgumentService = Depends(get_argument_service)
    ) -> GeneratedArgument:
        return service.generate(payload)

    @app.get("/api/history", response_model=List[HistoryEntry])
    def history(repository: Repository = Depends(get_repository)) -> List[HistoryEntry]:
        return repository.list_history()

    @app.post("/api/ask")
    async def ask(
        payload: AskRequest, request: Request, service: AskService = Depends(get_ask_service)
    ):
        """Answer a legal question with numbered citations to retrieved tesis."""
        task = asyncio.create_task(service.ask(payload.question))
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
            if done:
                break
            if await request.is_disconnected():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
                logger.info("Client disconnected; /api/ask pipeline cancelled")
                return Response(status_code=CLIENT_CLOSED_REQUEST)
        record = task.result()
        return JSONResponse(content=record.model_dump(by_alias=True, mode="json"))

    return app


app = create_app()
