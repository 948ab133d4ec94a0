"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import get_db_client
from api.middleware import RequestLoggingMiddleware
from api.models.responses import HealthResponse
from api.routers import sql
from config.settings import Config
from db.connection import DatabaseClient

config = Config.load()

logging.basicConfig(
    level=config.app.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the database client for the lifetime of the process."""
    logger.info("Starting %s %s", config.app.title, config.app.version)
    app.state.db_client = DatabaseClient(config.db)
    try:
        yield
    finally:
        app.state.db_client.close()
        logger.info("Application shutting down ...")


app = FastAPI(
    title=config.app.title,
    version=config.app.version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.app.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

# Register routers
app.include_router(sql.router)


@app.get("/health", response_model=HealthResponse)
def health(db: DatabaseClient = Depends(get_db_client)):
    return HealthResponse(status="healthy", database=db.test_connection())


if __name__ == "__main__":
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000)
