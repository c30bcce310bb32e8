from datetime import datetime
from typing import Optional

from medsales.models.upload import UploadStatus
from medsales.schemas import BaseRequest, BaseResponse


class UploadUrlRequest(BaseRequest):
    filename: str
    content_type: str
    size: Optional[int] = None


class UploadUrlResponse(BaseResponse):
    upload_url: str
    object_key: str
    public_url: str
    filename: str
    expires_in: int
    fields: dict


class UploadResponse(BaseResponse):
    id: int
    filename: str
    original_name: str
    content_type: str
    size: int
    url: str
    status: UploadStatus
    created_at: datetime
