from textwrap import dedent
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from mypy_boto3_s3 import S3Client

from files_api.errors import (
    FilesApiError,
    handle_broad_exceptions,
    handle_files_api_errors,
    handle_request_validation_errors,
)
from files_api.routers.files import router as files_router
from files_api.routers.health import router as health_router
from files_api.settings import Settings, load_settings
from files_api.storage_adapter import StorageAdapter

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, s3_client: Optional[S3Client] = None) -> FastAPI:
    """
    Create a FastAPI application.

    Settings are validated here, so a missing region, credential or bucket
    raises `ConfigurationMissing` before the app can serve anything.
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="Files API",
        summary="Store, replace and delete files in an S3 bucket",
        version="v1",
        description=dedent(
            """\
        Files are stored under a random key and addressed by their public S3 URL.

        | Endpoint | Effect |
        | --- | --- |
        | `POST /file` | upload, returns `{url}` |
        | `PUT /file/{id}` | replace the file at `path`, returns the new `{url}` |
        | `DELETE /file/{id}` | delete the file at `path` |
        """
        ),
        docs_url="/",  # its easier to find the docs when they live on the base url
        generate_unique_id_function=custom_generate_unique_id,
    )
    app.state.settings = settings
    app.state.storage_adapter = StorageAdapter(settings, s3_client=s3_client)
    logger.info(f"Files API configured for bucket {settings.s3_bucket_name}")

    app.include_router(files_router, tags=["files"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=FilesApiError,
        handler=handle_files_api_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=RequestValidationError,
        handler=handle_request_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
