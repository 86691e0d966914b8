# Run from project root: python -m app.main  (or: uvicorn app.main:app --port 3000)

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.api.routes import router
from app.core.config import PORT

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Server is running at http://localhost:%d", PORT)
    yield
    # uvicorn has stopped accepting connections and drained in-flight requests by now
    logger.info("Server shutting down")


app = FastAPI(title="Video Agent Backend", lifespan=lifespan)
app.include_router(router)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
