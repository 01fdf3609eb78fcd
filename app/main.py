import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Response, HTTPException
from fastapi.responses import HTMLResponse
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.interview import interview_router
from app.core.config import settings
from app.core.exceptions import AppError, app_error_handler, global_exception_handler, http_exception_handler
from app.core.logger import setup_logger
from app.services.pipeline.llm_service import GenerationClient
from app.services.pipeline.request_guard import RequestGuard

setup_logger(
    log_level=logging.DEBUG if settings.DEBUG_MODE else logging.INFO,
    clear_log=settings.CLEAR_LOG_ON_STARTUP,
    use_json=settings.LOG_JSON,
)
logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup: AI Interview Prep Guide")
    # The credential is read once here; a missing key only fails generation requests.
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set; prep guide generation will fail until it is configured.")
    app.state.generation_client = GenerationClient(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        timeout=settings.GEMINI_REQUEST_TIMEOUT,
    )
    app.state.request_guard = RequestGuard()
    yield
    logger.info("Application shutdown")

app = FastAPI(
    title="AI Interview Prep",
    description="Company interview prep guides generated by Gemini with Google Search grounding.",
    version="1.0.0",
    lifespan=lifespan
)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for simplicity in development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(interview_router, prefix="/api/v1", tags=["interview"])

@app.get("/", response_class=HTMLResponse)
async def read_root():
    return HTMLResponse((TEMPLATES_DIR / "index.html").read_text(encoding="utf-8"))

@app.get("/health")
async def health():
    return {"status": "ok", "model": settings.GEMINI_MODEL}

@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    return Response(status_code=204)
