"""FastAPI application entry point."""

import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before importing modules that read env vars (MongoDB connection)
load_dotenv()

# main.py is at <root>/src/api/main.py; src is two levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.dependencies import get_store
from api.routes import dictionary, dojo, health, journal, library, review, settings, speech
from utils import settings as config
from utils.logging import setup_structured_logging

setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Polyglot Dojo API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: load the study library once at startup."""
    store = get_store()
    logger.info("Study store ready", extra={
        "backend": store.backend,
        "language": store.language,
        "model": config.llm_model(),
    })
    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Language-learning API: dictionary, tutor chat, journal and flashcard review",
    version=VERSION,
    lifespan=lifespan,
)

# Credentials cannot be combined with a wildcard origin
cors_origins = config.cors_origins()
if cors_origins == "*":
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    allow_credentials = True
    logger.info("CORS configured with specific origins", extra={"origins": cors_origins})

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(health.router)
app.include_router(settings.router)
app.include_router(dictionary.router)
app.include_router(library.router)
app.include_router(review.router)
app.include_router(dojo.router)
app.include_router(journal.router)
app.include_router(speech.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=config.port(),
        access_log=False  # Application logs already cover requests
    )
