"""
FastAPI backend for redoscope.

Minimal API that takes a regular expression and returns its ReDoS report.
"""

import time
from contextlib import asynccontextmanager
from datetime import datetime

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from redoscope import __version__
from redoscope.config import get_settings, logger
from redoscope.models import DiagnosticReport, PatternInput
from redoscope.report import diagnose, diagnose_all

# Load environment variables
load_dotenv()

settings = get_settings()


# Request/Response Models
class AnalyzeRequest(BaseModel):
    """Request model - one pattern with optional flags."""
    pattern: str = Field(..., description="Regular expression to check", min_length=1)
    flags: str = Field(default="", max_length=16, description="Mode characters, e.g. 'i'")
    label: str = Field(default="pattern", max_length=255, description="Label used in the report")

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        if len(v) > settings.MAX_PATTERN_LENGTH:
            raise ValueError(f"Pattern longer than {settings.MAX_PATTERN_LENGTH} characters")
        return v


class BatchRequest(BaseModel):
    """Request model - several patterns checked concurrently."""
    patterns: list[AnalyzeRequest] = Field(..., min_length=1, max_length=100)


class AnalyzeResponse(BaseModel):
    """Response model with the diagnostic report."""
    success: bool
    report: DiagnosticReport | None = None
    error: str | None = None


class BatchResponse(BaseModel):
    success: bool
    reports: list[DiagnosticReport] = Field(default_factory=list)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info("redoscope backend starting (v%s)", __version__)
    logger.info("Analysis timeout: %gs, diagnostics: %s",
                settings.ANALYSIS_TIMEOUT_SECONDS,
                "enabled" if settings.ENABLE_DIAGNOSTICS else "disabled")
    yield
    logger.info("Shutting down")


# Initialize FastAPI
app = FastAPI(
    title="redoscope",
    description="Check regular expressions for ReDoS vulnerabilities",
    version=__version__,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unexpected errors without echoing the request body."""
    logger.error(
        "Unhandled exception on %s %s: %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        str(exc)[:200],
    )
    return JSONResponse(status_code=500, content={"success": False, "error": "Internal server error"})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    error_details = [
        {"field": err.get("loc", [])[-1] if err.get("loc") else "unknown", "type": err.get("type")}
        for err in exc.errors()[:5]
    ]
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, error_details)
    return JSONResponse(status_code=422, content={"success": False, "error": "Invalid request format"})


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "redoscope API",
        "version": __version__,
        "endpoints": {
            "/analyze": "POST - Check one regular expression",
            "/analyze/batch": "POST - Check several regular expressions",
            "/health": "GET - Health check"
        }
    }


@app.get("/health")
async def health():
    """Health check."""
    return {"status": "healthy"}


@app.post("/analyze", response_model=AnalyzeResponse, response_model_exclude_none=True)
async def analyze_pattern(request: AnalyzeRequest):
    """
    Check one regular expression.

    Analyzer failures are part of the report; only unexpected errors fail the request.
    """
    request_id = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    start_time = time.time()

    logger.info(f"[{request_id}] REQUEST RECEIVED - Pattern length: {len(request.pattern)} chars")

    report = await diagnose(
        request.label,
        request.pattern,
        request.flags,
        options=settings.invoker_options(),
        suggestion_limit=settings.MAX_SUGGESTIONS,
    )

    elapsed_time = time.time() - start_time
    logger.info(f"[{request_id}] REQUEST COMPLETED - Time taken: {elapsed_time:.3f}s - Status: {report.status}")

    return AnalyzeResponse(success=True, report=report)


@app.post("/analyze/batch", response_model=BatchResponse, response_model_exclude_none=True)
async def analyze_batch(request: BatchRequest):
    """Check several regular expressions concurrently."""
    patterns = [
        PatternInput(label=item.label, source=item.pattern, flags=item.flags)
        for item in request.patterns
    ]
    reports = await diagnose_all(
        patterns,
        options=settings.invoker_options(),
        concurrency=settings.BATCH_CONCURRENCY,
        suggestion_limit=settings.MAX_SUGGESTIONS,
    )
    return BatchResponse(success=True, reports=reports)


def main():
    """Run the server."""
    import uvicorn

    logger.info(f"Starting redoscope on {settings.HOST}:{settings.PORT}")
    uvicorn.run(
        "backend:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
