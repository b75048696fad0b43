# ============================================================================
# api/main.py
# ============================================================================
"""
FastAPI Backend for the Lisabella medical question service

Runs on port 3000 by default.
Classifies incoming questions and answers the approved ones.
"""

import sys
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from contextlib import asynccontextmanager

from medical_router.config import logging_settings, server_settings
from medical_router.core import MedicalQueryRouter, utc_timestamp
from medical_router.utils import LogAdapter, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and build the router once at startup."""
    setup_logging(
        level=logging_settings.LOG_LEVEL,
        log_file=logging_settings.LOG_FILE,
        format_json=logging_settings.LOG_JSON,
    )
    router = MedicalQueryRouter.from_settings()
    app.state.router = router

    stats = router.stats()
    logger.info(
        f"{server_settings.SERVICE_NAME} ready on http://{server_settings.HOST}:{server_settings.PORT}"
    )
    logger.info(f"Medical domains loaded: {stats['domains_count']}")
    yield

    logger.info("Shutting down, closing generation client")
    await router.close()


app = FastAPI(
    title="Lisabella Medical AI API",
    description="Classifies Spanish medical questions and answers the approved ones",
    version=server_settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=server_settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=server_settings.CORS_METHODS,
    allow_headers=server_settings.CORS_HEADERS,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_logger = LogAdapter(logger, {
        "ip": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    })
    request_logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


def get_router(request: Request) -> MedicalQueryRouter:
    return request.app.state.router


def _invalid_question(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Pregunta inválida",
            "message": message,
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Unparseable /api/ask bodies get the same 400 as a missing question
    if request.url.path == "/api/ask":
        return _invalid_question("La pregunta debe tener al menos 3 caracteres")
    return await request_validation_exception_handler(request, exc)


# ============================================================================
# Endpoints
# ============================================================================

def _health_payload() -> Dict[str, Any]:
    return {
        "status": "healthy",
        "service": server_settings.SERVICE_NAME,
        "version": server_settings.SERVICE_VERSION,
        "timestamp": utc_timestamp(),
    }


@app.get("/")
async def root():
    """Health check endpoint."""
    return _health_payload()


@app.get("/api/health")
async def health():
    """Health check for monitoring."""
    return _health_payload()


@app.get("/api/stats")
async def stats(router: MedicalQueryRouter = Depends(get_router)):
    """Vocabulary sizes, model name and server status."""
    return router.stats()


@app.post("/api/ask")
async def ask(
    payload: Any = Body(default=None),
    router: MedicalQueryRouter = Depends(get_router)
):
    """
    Classify a question and, when approved, answer it.

    Body: {"question": str}. Any other JSON value counts as a missing question.

    Returns:
        200 with {"success", "classification", "response", ["timestamp"]}
        400 when the question is missing, too short or too long
        500 on unexpected failures
    """
    question = payload.get("question") if isinstance(payload, dict) else None

    if not router.validate_question(question):
        return _invalid_question("La pregunta debe tener al menos 3 caracteres")

    if len(question) > server_settings.MAX_QUESTION_LENGTH:
        return _invalid_question(
            f"La pregunta no debe superar los {server_settings.MAX_QUESTION_LENGTH} caracteres"
        )

    try:
        return await router.ask(question)
    except Exception as e:
        logger.exception(f"Error in /api/ask: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Error interno del servidor",
                "message": str(e),
            },
        )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=server_settings.HOST, port=server_settings.PORT)
