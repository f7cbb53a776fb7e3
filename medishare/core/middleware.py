# medishare/core/middleware.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
import logging
from typing import Optional

from medishare.config.settings import settings
from medishare.core.exceptions import MediShareError
from medishare.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = None):
    """Configure root logging once for the process"""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT
    )


def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure properly for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response


def setup_exception_handlers(app: FastAPI):
    """Render service errors with the shared error body"""

    @app.exception_handler(MediShareError)
    async def medishare_error_handler(request: Request, exc: MediShareError):
        logger.warning(f"⚠️ {exc.error_code} on {request.method} {request.url.path}: {exc.detail}")
        body = ErrorResponse(
            message=str(exc.detail),
            error_code=exc.error_code,
            details=exc.details or None
        )
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))
