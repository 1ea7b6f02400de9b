"""
FastAPI application for the UGC intake API.

Production deployment configuration via environment variables
(see utils.config.Config).
"""

import logging
import mimetypes
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.submission import JsonSubmissionRepository, LocalFileStore
from utils.config import Config
from web.submission_routes import router as submission_router


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed requests are reported as 400, like every other rejection."""
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request.",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or Config.load()

    logging.basicConfig(level=config.effective_log_level, format=LOG_FORMAT)

    app = FastAPI(
        title="UGC Intake API",
        description="Public intake of user-generated content submissions",
        version="0.1.0",
        debug=config.debug,
    )

    # Shared collaborators, one per app
    app.state.config = config
    app.state.file_store = LocalFileStore(
        upload_root=config.upload_dir,
        url_prefix=config.upload_url_prefix,
    )
    app.state.repository = JsonSubmissionRepository(config.submissions_path)

    @app.get("/health", include_in_schema=False)
    def health():
        """Health endpoint. No dependencies, no IO."""
        return {"status": "ok"}

    # The intake form is embedded on third-party sites
    origins = config.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include submission routes
    app.include_router(submission_router)

    file_store = app.state.file_store

    @app.get(file_store.url_prefix + "/{stored_name}", include_in_schema=False)
    def get_uploaded_file(stored_name: str):
        """Serve a stored upload by the name in its FileUrl."""
        content = file_store.retrieve(stored_name)
        if content is None:
            raise HTTPException(status_code=404, detail="File not found")

        media_type, _ = mimetypes.guess_type(stored_name)
        return Response(content=content, media_type=media_type or "application/octet-stream")

    logger.info(
        "UGC intake API configured (uploads: %s, %d files; records: %s, %d submissions)",
        config.upload_dir,
        app.state.file_store.count(),
        config.submissions_path,
        app.state.repository.count(),
    )
    return app


# Create app instance for uvicorn
app = create_app()
