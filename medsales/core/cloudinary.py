import time
from typing import Any, BinaryIO

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
import cloudinary.utils

from medsales.core.config import settings
from medsales.core.exceptions import BlobStoreError


class Cloudinary:
    def __init__(self):
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=settings.CLOUDINARY_SECURE,
        )
        self.folder = settings.CLOUDINARY_FOLDER

    def object_key(self, public_id: str) -> str:
        return f"{self.folder}/{public_id}"

    def public_url(self, public_id: str) -> str:
        return f"https://res.cloudinary.com/{settings.CLOUDINARY_CLOUD_NAME}/image/upload/f_auto,q_auto/{self.object_key(public_id)}"

    def upload(self, file: BinaryIO, public_id: str) -> str:
        try:
            upload_result = cloudinary.uploader.upload(
                file, public_id=public_id, folder=self.folder, resource_type="image"
            )
        except cloudinary.exceptions.Error as e:
            raise BlobStoreError("Failed to upload file", detail=str(e)) from e

        return f"https://res.cloudinary.com/{settings.CLOUDINARY_CLOUD_NAME}/image/upload/f_auto,q_auto/{upload_result['public_id']}"

    def delete(self, public_id: str) -> None:
        try:
            cloudinary.uploader.destroy(self.object_key(public_id))
        except cloudinary.exceptions.Error as e:
            raise BlobStoreError("Failed to delete file", detail=str(e)) from e

    def sign_upload(self, public_id: str) -> dict[str, Any]:
        """Signed form fields a browser can post straight to Cloudinary."""
        params = {
            "folder": self.folder,
            "public_id": public_id,
            "timestamp": int(time.time()),
        }
        signature = cloudinary.utils.api_sign_request(
            params, settings.CLOUDINARY_API_SECRET
        )
        return {**params, "signature": signature, "api_key": settings.CLOUDINARY_API_KEY}

    def upload_url(self) -> str:
        return f"https://api.cloudinary.com/v1_1/{settings.CLOUDINARY_CLOUD_NAME}/image/upload"


def get_blob_store() -> Cloudinary:
    return Cloudinary()
