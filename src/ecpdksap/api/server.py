import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ecpdksap import __version__
from ecpdksap.api.routes import router
from ecpdksap.core.config import ScanConfig
from ecpdksap.errors import StealthError

logger = logging.getLogger("ecpdksap.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load configuration
    try:
        app.state.scan_config = ScanConfig.from_env()
    except ValueError as e:
        logger.warning(f"Invalid ECPDKSAP_SCAN_* settings ({e}); using defaults")
        app.state.scan_config = ScanConfig()

    logger.info(f"Scan config: {app.state.scan_config}")
    yield


app = FastAPI(
    title="ecpdksap - Stealth Address API",
    description="REST API for dual-key stealth address send / scan with view tags",
    version=__version__,
    lifespan=lifespan,
)

# Allow CORS for easy frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(router)


@app.exception_handler(StealthError)
async def stealth_error_handler(request: Request, exc: StealthError):
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "kind": exc.kind},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc)},
    )


@app.get("/health")
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok"}
