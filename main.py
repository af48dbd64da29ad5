"""Address Verifier – FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from logging_setup import setup_logger
from routers import location
from services.places_client import GooglePlacesClient
from services.rate_limiter import RateLimiter
from services.verifier import AddressVerifier

logger = setup_logger(
    "address_verifier",
    config.LOG_DIR,
    "address_verifier.log",
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
)


def build_verifier() -> AddressVerifier:
    """Create the verifier and its single shared rate limiter from config."""
    client = GooglePlacesClient(
        config.GOOGLE_PLACES_API_KEY,
        rate_limiter=RateLimiter(config.PLACES_MIN_REQUEST_INTERVAL),
        timeout=config.PLACES_REQUEST_TIMEOUT,
    )
    if client.configured:
        logger.info("Google Places API key configured")
    else:
        logger.warning(
            "Google Places API key not configured. "
            "Address verification will use fallback mode."
        )
    return AddressVerifier(client)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Address verifier ready (mode=%s, timeout=%.1fs)",
        "google_places" if app.state.verifier.remote_enabled else "manual",
        config.PLACES_REQUEST_TIMEOUT,
    )
    yield
    logger.info("Address verifier shutting down")


app = FastAPI(
    title="Address Verifier",
    description="Verify free-text addresses and score their confidence and completeness.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.state.verifier = build_verifier()

app.include_router(location.router)


@app.get("/health")
async def health():
    return {"status": "ok", "service": "address-verifier"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT)
