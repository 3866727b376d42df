"""
FastAPI server for Middle Earth Search.

Holds one search session for the process: the corpus is loaded once on first
use and stays read-only. Searches run in a worker thread and are serialized
on a single lock; a corpus or embedder that cannot be set up is reported as a
JSON error.
"""

import asyncio
import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from .corpus import Corpus
from .embeddings import EmbeddingProvider
from .index_config import resolve_corpus_path
from .models import ContextResponse, HitModel, SearchRequest, SearchResponse
from .search import DimensionMismatchError, UnknownBookError
from .session import SearchSession, SessionBusyError
from .storage import JSONCorpusStorage

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Middle Earth Search",
    description="Semantic paragraph search over The Lord of the Rings",
)

_SESSION: SearchSession | None = None
_search_lock = asyncio.Lock()


class CorpusNotFoundError(FileNotFoundError):
    """Raised when no corpus file exists at the configured path."""


def get_session() -> SearchSession:
    """Return the process-wide session, loading the corpus on first use."""
    global _SESSION
    if _SESSION is None:
        storage = JSONCorpusStorage(resolve_corpus_path())
        if not storage.exists():
            raise CorpusNotFoundError(f"No corpus found at {storage.path}")
        corpus = Corpus.load(storage)
        logger.info("Loaded %d paragraphs from %s", len(corpus), storage.path)
        _SESSION = SearchSession(corpus, EmbeddingProvider())
    return _SESSION


def set_session(session: SearchSession) -> None:
    global _SESSION
    _SESSION = session


def reset_session() -> None:
    global _SESSION
    _SESSION = None


def _search_response(session: SearchSession) -> SearchResponse:
    visible = session.visible_results
    return SearchResponse(
        query=session.query,
        books=[book for book in session.corpus.books if book in session.selected_books],
        total=len(session.results),
        visible=len(visible),
        has_more=session.has_more,
        hits=[HitModel.from_result(result) for result in visible],
    )


@app.get("/api/status")
async def status():
    """Report whether the corpus is loaded and a search is running."""
    try:
        session = get_session()
    except CorpusNotFoundError as exc:
        return JSONResponse({"status": "missing", "error": str(exc)}, status_code=404)
    except ValueError as exc:
        return JSONResponse({"status": "error", "error": str(exc)}, status_code=500)
    return {
        "status": session.status,
        "paragraphs": len(session.corpus),
        "dimension": session.corpus.dimension,
    }


@app.get("/api/books")
async def list_books():
    """List the books in the corpus and which of them are selected."""
    try:
        session = get_session()
    except CorpusNotFoundError as exc:
        return JSONResponse({"error": str(exc)}, status_code=404)
    except ValueError as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)
    return {
        "books": [
            {"title": book, "selected": book in session.selected_books}
            for book in session.corpus.books
        ]
    }


@app.post("/api/search")
async def search(request: SearchRequest):
    """Run a new search and return the first page of results."""
    try:
        session = get_session()
        books = session.corpus.books if request.books is None else request.books
        async with _search_lock:
            await asyncio.to_thread(session.search, request.query, books)
            return _search_response(session)
    except CorpusNotFoundError as exc:
        return JSONResponse({"error": str(exc)}, status_code=404)
    except UnknownBookError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    except SessionBusyError as exc:
        return JSONResponse({"error": str(exc)}, status_code=409)
    except DimensionMismatchError as exc:
        logger.error("Embedding configuration error: %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=500)
    except ValueError as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)


@app.post("/api/search/more")
async def load_more():
    """Extend the visible window of the current result set."""
    try:
        session = get_session()
    except CorpusNotFoundError as exc:
        return JSONResponse({"error": str(exc)}, status_code=404)
    except ValueError as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)
    async with _search_lock:
        session.load_more()
        return _search_response(session)


@app.get("/api/context/{record_id}")
async def context(record_id: int):
    """Return a paragraph with its neighbours, whatever the book filter."""
    try:
        session = get_session()
        paragraph_context = session.context(record_id)
    except CorpusNotFoundError as exc:
        return JSONResponse({"error": str(exc)}, status_code=404)
    except KeyError:
        return JSONResponse(
            {"error": f"No paragraph with id {record_id}"}, status_code=404
        )
    except ValueError as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)
    return ContextResponse.from_context(paragraph_context)


def run_server(host: str = "127.0.0.1", port: int = 8000):
    """Run the FastAPI server."""
    import uvicorn

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
