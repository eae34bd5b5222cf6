import logging

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from resume_analyzer.api.routes.analyze import router as analyze_router
from resume_analyzer.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    description="Resume extraction, scoring and job matching with an optional AI oracle and deterministic fallbacks",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(analyze_router)


@app.get("/", tags=["health"])
def root():
    return {"service": "resume-analyzer", "status": "running"}


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok", "oracle": bool(settings.openai_api_key)}


def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Resume Analyzer API",
        version="0.1.0",
        description="Resume extraction, scoring and job matching API",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi
