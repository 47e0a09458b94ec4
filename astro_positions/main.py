import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from astro_positions.api.dependencies import get_provider
from astro_positions.api.errors import register_exception_handlers
from astro_positions.api.v1.router import api_router
from astro_positions.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Build and self-check the provider once; an incompatible build fails here.
    provider = get_provider()
    logger.info("Ephemeris provider ready: %s", provider.describe())
    yield


app = FastAPI(title="Astro Positions", version=settings.VERSION, lifespan=lifespan)

# 1. Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 2. Uniform {"error": ...} responses
register_exception_handlers(app)

# 3. Include API Routes
app.include_router(api_router, prefix="/api/v1")


def run():
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", type=str, default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    logger.info("Server starting on http://%s:%s/api/v1", args.host, args.port)
    uvicorn.run("astro_positions.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    run()
