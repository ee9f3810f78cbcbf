# main.py
from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Any, Dict

from fastapi import Body, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from config import Settings, settings
from errors import ValidationError
from logging_config import setup_logging
from models import ErrorResponse, FailureResponse, GenerateItineraryResponse, ItineraryRecord
from request_context import new_request_id
from services.itinerary_service import ItineraryService
from services.openai_service import CompletionClient
from store import ItineraryStore
from validation import MISSING_FIELDS_MESSAGE, validate_itinerary_request

# Initialize logging BEFORE creating the app
setup_logging(settings.log_level)
log = logging.getLogger("app")

app = FastAPI(
    title="AI Trip Planner",
    version="0.1.0",
    description="Itinerary generation over a chat-completion service with a templated fallback",
)

@app.on_event("startup")
async def on_startup():
    log.info("App starting", extra={
        "model": settings.OPENAI_MODEL,
        "env": settings.APP_ENV,
        "debug": settings.DEBUG,
        "openai_key_loaded": bool(settings.OPENAI_API_KEY),
        "fallback_on_upstream_error": settings.FALLBACK_ON_UPSTREAM_ERROR,
    })

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
    expose_headers=settings.CORS_EXPOSE_HEADERS,
)

@app.middleware("http")
async def request_logging_mw(request: Request, call_next):
    rid = new_request_id(request.headers.get("x-request-id"))
    start = time.perf_counter()
    response: Response | None = None
    try:
        response = await call_next(request)
        response.headers["X-Request-Id"] = rid
        return response
    finally:
        dur_ms = int((time.perf_counter() - start) * 1000)
        log.info(
            f"{request.method} {request.url.path} -> {getattr(response, 'status_code', '?')} in {dur_ms}ms",
            extra={
                "request_id": rid,
                "path": request.url.path,
                "method": request.method,
                "status": getattr(response, "status_code", None),
                "duration_ms": dur_ms,
            },
        )

@app.exception_handler(RequestValidationError)
async def body_validation_handler(request: Request, exc: RequestValidationError):
    # An absent or non-object body is treated like a body with no fields.
    log.info("Unreadable request body", extra={"path": request.url.path, "errors": len(exc.errors())})
    return JSONResponse(status_code=400, content=ErrorResponse(error=MISSING_FIELDS_MESSAGE).model_dump())

# --- dependencies ---
@lru_cache(maxsize=1)
def get_store() -> ItineraryStore:
    return ItineraryStore()

@lru_cache(maxsize=1)
def get_completion_client() -> CompletionClient:
    return CompletionClient(settings)

def get_itinerary_service(
    client: CompletionClient = Depends(get_completion_client),
    store: ItineraryStore = Depends(get_store),
) -> ItineraryService:
    return ItineraryService(client, store, settings)

# --- routes ---
@app.get("/health")
def health():
    has_key = bool(settings.OPENAI_API_KEY)
    return {"status": "ok", "openai_key_loaded": has_key, "model": settings.OPENAI_MODEL}

@app.post(
    "/api/generate-itinerary",
    response_model=GenerateItineraryResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": FailureResponse}},
)
def generate_itinerary_endpoint(
    payload: Dict[str, Any] = Body(...),
    service: ItineraryService = Depends(get_itinerary_service),
):
    try:
        req = validate_itinerary_request(payload)
        return service.generate(req)
    except ValidationError as e:
        return JSONResponse(status_code=e.status_code, content=ErrorResponse(error=e.message).model_dump())
    except Exception as e:
        log.exception("Itinerary generation failed")
        return JSONResponse(status_code=500, content=FailureResponse(message=str(e)).model_dump())

@app.get(
    "/api/itineraries/{itinerary_id}",
    response_model=ItineraryRecord,
    responses={404: {"model": ErrorResponse}},
)
def get_itinerary(itinerary_id: str, store: ItineraryStore = Depends(get_store)):
    record = store.get(itinerary_id)
    if record is None:
        log.warning("Itinerary not found", extra={"itinerary_id": itinerary_id})
        return JSONResponse(status_code=404, content=ErrorResponse(error="Itinerary not found").model_dump())
    return record

def mount_static(app: FastAPI, settings: Settings) -> None:
    # Call after the API routes are registered so they take precedence
    if settings.SERVE_STATIC:
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

mount_static(app, settings)

if __name__ == "__main__":
    import uvicorn

    log.info(f"Starting server on {settings.HOST}:{settings.PORT}")
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        workers=1,
        log_level="info" if settings.APP_ENV == "production" else "debug",
    )
