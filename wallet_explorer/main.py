import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import health, stats, wallet
from .config import settings
from .errors import ExplorerError
from .logging_config import setup_logging
from .middleware import RequestLoggingMiddleware

logger = logging.getLogger(__name__)

setup_logging()

# Create FastAPI app
app = FastAPI(
    title="Wallet Explorer API",
    description="Balances, transactions and token holdings for EVM wallets",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(ExplorerError)
async def explorer_error_handler(request: Request, exc: ExplorerError) -> JSONResponse:
    """Render typed errors as ``{"error": ...}``; upstream details stay in the logs."""
    if exc.status_code >= 500:
        logger.error(
            "request failed: %s",
            exc.message,
            extra={
                "error_type": type(exc).__name__,
                "provider": getattr(exc, "provider", None),
                "upstream_status": getattr(exc, "status", None),
                "detail": exc.detail,
                "path": request.url.path,
            },
        )
        return JSONResponse({"error": exc.public_message}, status_code=exc.status_code)

    logger.warning(
        "rejected request: %s",
        exc.message,
        extra={"error_type": type(exc).__name__, "path": request.url.path},
    )
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse({"error": "Server error"}, status_code=500)


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(wallet.router, tags=["Wallet"])
app.include_router(stats.router, tags=["Stats"])


@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "name": "Wallet Explorer API",
        "version": "0.1.0",
        "description": "Balances, transactions and token holdings for EVM wallets",
        "docs": "/docs",
        "health": "/healthz"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "wallet_explorer.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower()
    )
