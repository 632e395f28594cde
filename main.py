"""
Sui Attestation Service - FastAPI entry point

Owns the lifecycle of the chain gateway: it is created on startup, shared by
every request through app.state and closed on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from config import Settings, get_settings
from routers import attestations, schemas, transactions
from services import AttestationService
from services.sui_gateway import SuiGateway

# Configure logger for this module
logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.MOVE_PACKAGE_ID:
            raise RuntimeError("MOVE_PACKAGE_ID environment variable is not set.")

        gateway = SuiGateway.from_settings(settings)
        app.state.settings = settings
        app.state.attestation_service = AttestationService.from_settings(gateway, settings)
        logger.info(f"Attestation service ready on {settings.SUI_NETWORK} for package {settings.MOVE_PACKAGE_ID}")
        try:
            yield
        finally:
            await gateway.close()
            logger.info("Sui gateway closed")

    app = FastAPI(
        title="Sui Attestation Service",
        description="Schemas and attestations as Sui objects",
        debug=settings.DEBUG,
        lifespan=lifespan
    )
    app.include_router(schemas.router)
    app.include_router(attestations.router)
    app.include_router(transactions.router)
    return app


def main() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(create_app(settings), host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    main()
