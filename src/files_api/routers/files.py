from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    Path,
    Request,
    UploadFile,
    status
)
from fastapi.concurrency import run_in_threadpool

from files_api.schemas import (
    FILE_DELETED_MESSAGE,
    DeleteFileRequest,
    DeleteFileResponse,
    FileUrlResponse,
)
from files_api.storage_adapter import StorageAdapter

router = APIRouter()


def get_storage_adapter(request: Request) -> StorageAdapter:
    """Storage adapter built once by `create_app`."""
    return request.app.state.storage_adapter


@router.post(
    "/file",
    response_model=FileUrlResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_file(
    file: UploadFile = File(..., description="The file to upload"),
    storage: StorageAdapter = Depends(get_storage_adapter),
) -> FileUrlResponse:
    """
    Upload a file to the bucket.

    Returns:
        FileUrlResponse: URL of the stored file
    """
    content = await file.read()
    url = await run_in_threadpool(
        storage.upload, content, file.filename or "", content_type=file.content_type
    )
    return FileUrlResponse(url=url)


@router.delete("/file/{file_id}", response_model=DeleteFileResponse)
async def delete_file(
    body: DeleteFileRequest,
    file_id: str = Path(..., description="Accepted for REST symmetry, not used"),
    storage: StorageAdapter = Depends(get_storage_adapter),
) -> DeleteFileResponse:
    """Delete the file stored at `body.path`."""
    await run_in_threadpool(storage.delete, body.path)
    return DeleteFileResponse(message=FILE_DELETED_MESSAGE)


@router.put("/file/{file_id}", response_model=FileUrlResponse)
async def update_file(
    file: UploadFile = File(..., description="The replacement file"),
    path: str = Form(..., description="URL of the file to replace"),
    file_id: str = Path(..., description="Accepted for REST symmetry, not used"),
    storage: StorageAdapter = Depends(get_storage_adapter),
) -> FileUrlResponse:
    """
    Replace the file at `path` with a new upload.

    The old file is deleted before the new one is stored. If the upload fails
    the old file is already gone.

    Returns:
        FileUrlResponse: URL of the new file
    """
    content = await file.read()
    url = await run_in_threadpool(
        storage.update, content, file.filename or "", path, content_type=file.content_type
    )
    return FileUrlResponse(url=url)
