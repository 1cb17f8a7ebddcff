# main.py

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from ecofinds.logging import logger
from ecofinds.api import api_router
from ecofinds.core.config import settings
from ecofinds.core.error_handlers import setup_error_handlers, add_request_id_middleware
from ecofinds.core.rate_limiter import limiter
from ecofinds.database.core import engine
from ecofinds.database.seed import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and default categories on startup."""
    logger.info("Starting database initialization...")
    init_db(engine)
    logger.info(f"{settings.API_TITLE} {settings.API_VERSION} started ({settings.ENVIRONMENT})")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

# Set up error handlers
setup_error_handlers(app)

# slowapi looks the limiter up on app state for decorated routes
app.state.limiter = limiter

# Login state lives in a signed cookie
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET_KEY,
    session_cookie=settings.SESSION_COOKIE_NAME,
    max_age=settings.SESSION_MAX_AGE,
    same_site='lax',
    https_only=settings.is_production,
)

# Add CORS middleware; credentials are needed for the session cookie
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request ID middleware for better error tracking
app.middleware("http")(add_request_id_middleware)

app.include_router(api_router, prefix="/api")


# Health check endpoint for production monitoring
@app.get("/health")
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=not settings.is_production)
