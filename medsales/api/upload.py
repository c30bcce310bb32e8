from io import BytesIO
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from medsales.core.cloudinary import Cloudinary, get_blob_store
from medsales.core.config import settings
from medsales.core.database import get_db
from medsales.core.exceptions import (
    BlobStoreError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from medsales.core.logger import logger
from medsales.core.middleware import user_is_editor
from medsales.core.utils import unique_filename, validate_file_size, validate_file_type
from medsales.models.upload import Upload, UploadStatus
from medsales.models.user import User
from medsales.schemas import (
    ApiResponse,
    MessageResponse,
    PageRequest,
    PaginatedResponse,
    page_request,
)
from medsales.schemas.upload import UploadResponse, UploadUrlRequest, UploadUrlResponse

router = APIRouter(prefix="/upload", tags=["upload"])

INVALID_TYPE = "Invalid file type. Only JPG, PNG, WebP, SVG are allowed"
TOO_LARGE = f"File size exceeds {settings.UPLOAD_MAX_SIZE // (1024 * 1024)}MB limit"


@router.post("/url")
async def create_upload_url(
    data: UploadUrlRequest,
    db: Session = Depends(get_db),
    blob_store: Cloudinary = Depends(get_blob_store),
    _: User = Depends(user_is_editor),
) -> ApiResponse[UploadUrlResponse]:
    """Issue signed parameters for a direct browser upload"""
    if not data.filename or not data.content_type:
        raise ValidationError("Filename and content type are required")
    if not validate_file_type(data.filename, data.content_type):
        raise ValidationError(INVALID_TYPE)
    if data.size and not validate_file_size(data.size):
        raise ValidationError(TOO_LARGE)

    filename = unique_filename(data.filename)
    upload = Upload(
        filename=filename,
        original_name=data.filename,
        content_type=data.content_type,
        size=data.size or 0,
        status=UploadStatus.pending,
    )
    upload.url = blob_store.public_url(upload.public_id)
    upload.save(db)

    return ApiResponse(
        data=UploadUrlResponse(
            upload_url=blob_store.upload_url(),
            object_key=blob_store.object_key(upload.public_id),
            public_url=upload.url,
            filename=filename,
            expires_in=settings.UPLOAD_URL_EXPIRES_IN,
            fields=blob_store.sign_upload(upload.public_id),
        )
    )


@router.post("", status_code=201)
async def upload_file(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    blob_store: Cloudinary = Depends(get_blob_store),
    _: User = Depends(user_is_editor),
) -> ApiResponse[UploadResponse]:
    """Upload an image and record it"""
    original_name = file.filename or ""
    content_type = file.content_type or ""
    if not validate_file_type(original_name, content_type):
        raise ValidationError(INVALID_TYPE)

    content = await file.read()
    if not validate_file_size(len(content)):
        raise ValidationError(TOO_LARGE)

    upload = Upload(
        filename=unique_filename(original_name),
        original_name=original_name,
        content_type=content_type,
        size=len(content),
        status=UploadStatus.active,
    )
    # the blob store overwrites on a repeated public id
    if Upload.get(db, filename=upload.filename):
        raise ConflictError(Upload.CONFLICT_MESSAGE)
    upload.url = blob_store.upload(BytesIO(content), public_id=upload.public_id)

    try:
        upload.save(db)
    except (StoreError, ConflictError):
        # a blob without a row is unreachable from the admin list
        blob_store.delete(upload.public_id)
        raise

    logger.info(f"Uploaded {upload.filename} ({upload.size} bytes)")
    return ApiResponse(data=UploadResponse.model_validate(upload))


@router.get("/uploads")
async def get_uploads(
    page: PageRequest = Depends(page_request),
    status: Optional[UploadStatus] = None,
    db: Session = Depends(get_db),
    _: User = Depends(user_is_editor),
) -> ApiResponse[PaginatedResponse[UploadResponse]]:
    """List uploaded files, newest first"""
    uploads, total = Upload.paginate(
        db, page, where=Upload.build_filter({"status": status})
    )
    items = [UploadResponse.model_validate(upload) for upload in uploads]
    return ApiResponse(data=PaginatedResponse.build(items, total, page))


@router.delete("/uploads/{upload_id}")
async def delete_upload(
    upload_id: int,
    db: Session = Depends(get_db),
    blob_store: Cloudinary = Depends(get_blob_store),
    _: User = Depends(user_is_editor),
) -> ApiResponse[MessageResponse]:
    """Delete an uploaded file and its record"""
    upload = Upload.get(db, id=upload_id)
    if not upload:
        raise NotFoundError("File not found")

    try:
        blob_store.delete(upload.public_id)
    except BlobStoreError as e:
        logger.warning(f"Failed to delete blob {upload.filename}: {e.detail}")

    upload.delete(db)
    logger.info(f"Deleted upload {upload_id}")
    return ApiResponse(data=MessageResponse(message="File deleted successfully"))
