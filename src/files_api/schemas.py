####################################
# --- Request/response schemas --- #
####################################

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)

FILE_DELETED_MESSAGE = "File deleted successfully"


class FileUrlResponse(BaseModel):
    """Response model for `POST /file` and `PUT /file/:id`."""
    url: str = Field(
        description="Public URL of the stored file.",
        json_schema_extra={
            "example": "https://my-bucket.s3.amazonaws.com/0b7c6f0e-3d4a-4e0b-9a55-1f0c2d6a9e11-a.png"
        },
    )


class DeleteFileRequest(BaseModel):
    """Request body for `DELETE /file/:id`."""
    path: str = Field(description="URL of the file to delete, as returned on upload.")


class DeleteFileResponse(BaseModel):
    """Response model for `DELETE /file/:id`."""
    message: str

    model_config = ConfigDict(
        json_schema_extra={"example": {"message": FILE_DELETED_MESSAGE}}
    )


class HealthResponse(BaseModel):
    """Response model for `GET /health`."""
    status: str
    bucket: str
