"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from huddle.api.v1.api import api_router
from huddle.db.mysql import close_db, init_db
from huddle.settings import settings
from huddle.utils.logging import setup_logging

logger = setup_logging("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.validate_configuration()
    if not settings.use_memory_store:
        init_db()
    logger.info(f"Huddle API started: environment={settings.environment}")
    yield
    close_db()


app = FastAPI(
    title="Huddle API",
    description="Python backend for the Huddle team chat workspace",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
def root():
    return {"status": "ok", "service": "Huddle API", "version": "0.1.0"}


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("huddle.main:app", host=settings.host, port=settings.port, reload=settings.debug)
