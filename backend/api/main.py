"""
FastAPI main application.
"""
import logging
import sqlite3

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import CORS_ORIGINS, LOG_LEVEL
from core.config_validator import config_validator
from core.errors import ConfigurationError, InvalidRequestError, UpstreamServiceError
from api.routes import auth, transcripts

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Chaptgen API",
    description="Chapter markers for YouTube videos",
    version="1.0.0",
)


@app.on_event("startup")
async def validate_configuration():
    """Validate configuration on application startup."""
    logger.info("Validating configuration...")

    validation_result = config_validator.validate_all()

    for warning in validation_result["warnings"]:
        logger.warning(warning)

    if not validation_result["valid"]:
        for error in validation_result["errors"]:
            logger.error(error)
        logger.critical("Application startup aborted due to configuration errors.")
        raise SystemExit(1)

    logger.info("Configuration validated successfully")


@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"{request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(UpstreamServiceError)
async def upstream_error_handler(request: Request, exc: UpstreamServiceError):
    logger.error(f"{request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(sqlite3.IntegrityError)
async def integrity_error_handler(request: Request, exc: sqlite3.IntegrityError):
    return JSONResponse(
        status_code=400,
        content={"detail": f"Invalid data (FK/unique). {exc}"},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(transcripts.router, prefix="/transcripts", tags=["transcripts"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Chaptgen API", "version": "1.0.0"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
