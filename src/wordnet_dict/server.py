"""
WordNet dictionary HTTP API.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from wordnet_dict import __version__
from wordnet_dict import db as _db
from wordnet_dict.config import Settings
from wordnet_dict.exceptions import LemmaNotFoundError, ValidationError
from wordnet_dict.query import QueryService, normalize_query

logger = logging.getLogger(__name__)

ENDPOINTS = ["/healthz", "/define", "/synonyms", "/antonyms", "/pos"]


class Entry(BaseModel):
    offset: str
    pos: str
    definition: str
    examples: list[str]
    synonyms: list[str]
    antonyms: list[str]


class SynonymEntry(BaseModel):
    offset: str
    pos: str
    synonyms: list[str]


class AntonymEntry(BaseModel):
    offset: str
    pos: str
    antonyms: list[str]


class DefineResponse(BaseModel):
    lemma: str
    entries: list[Entry]


class SynonymsResponse(BaseModel):
    lemma: str
    entries: list[SynonymEntry]


class AntonymsResponse(BaseModel):
    lemma: str
    entries: list[AntonymEntry]


class PartsOfSpeechResponse(BaseModel):
    lemma: str
    partsOfSpeech: list[str]


def missing_word_payload(received: Optional[str]) -> dict[str, Any]:
    return {
        "error": 'Missing required "word" query parameter',
        "details": "Use /path?word=example to fetch data for a specific lemma.",
        "received": received,
    }


def not_found_payload(word: str) -> dict[str, Any]:
    return {"error": f'Word "{word}" was not found in the dictionary.'}


def create_app(service: QueryService, *, log: logging.Logger | None = None) -> FastAPI:
    """Build the API around ``service``."""
    log = log or logger
    app = FastAPI(title="WordNet Dictionary API", version=__version__)
    app.state.query_service = service

    @app.middleware("http")
    async def unexpected_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            log.exception(f"Unhandled HTTP error on {request.method} {request.url.path}")
            return JSONResponse({"error": "Unexpected server error"}, status_code=500)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return JSONResponse({"error": "Route not found"}, status_code=404)
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)

    @app.exception_handler(ValidationError)
    async def bad_request(request: Request, exc: ValidationError):
        return JSONResponse(
            missing_word_payload(request.query_params.get("word")),
            status_code=400,
        )

    @app.exception_handler(LemmaNotFoundError)
    async def lemma_not_found(request: Request, exc: LemmaNotFoundError):
        word = request.query_params.get("word") or exc.lemma
        return JSONResponse(not_found_payload(word), status_code=404)

    @app.get("/")
    def root():
        return {"service": "wordnet-dict-api", "version": __version__, "endpoints": ENDPOINTS}

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/define", response_model=DefineResponse)
    def define(word: Optional[str] = None):
        lemma = normalize_query(word)
        entries = service.definitions_for(lemma)
        return {"lemma": lemma, "entries": [e.to_dict() for e in entries]}

    @app.get("/synonyms", response_model=SynonymsResponse)
    def synonyms(word: Optional[str] = None):
        lemma = normalize_query(word)
        return {"lemma": lemma, "entries": service.synonyms_for(lemma)}

    @app.get("/antonyms", response_model=AntonymsResponse)
    def antonyms(word: Optional[str] = None):
        lemma = normalize_query(word)
        return {"lemma": lemma, "entries": service.antonyms_for(lemma)}

    @app.get("/pos", response_model=PartsOfSpeechResponse)
    def parts_of_speech(word: Optional[str] = None):
        lemma = normalize_query(word)
        return {"lemma": lemma, "partsOfSpeech": service.parts_of_speech_for(lemma)}

    return app


def app_for_database(db_path: str | Path) -> FastAPI:
    """Create the schema if needed and build the API over ``db_path``."""
    _db.open_database(db_path).close()
    return create_app(QueryService.for_path(db_path))


def run_server(settings: Settings) -> None:
    """Serve the API with uvicorn until interrupted."""
    import uvicorn

    app = app_for_database(settings.db_path)
    logger.info(f"HTTP server listening on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
