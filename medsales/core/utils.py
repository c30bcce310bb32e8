import os
import secrets
import string
import time

from slugify import slugify as _slugify

from medsales.core.config import settings

ALLOWED_CONTENT_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/svg+xml",
)
ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".svg")
# width of the slug column
SLUG_MAX_LENGTH = 255


def slugify(text: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Derive a URL-safe slug from a display title.

    Non-Latin scripts are transliterated (`心电监护仪` becomes
    `xin-dian-jian-hu-yi`), so the result only ever contains `a-z`,
    `0-9` and single inner hyphens. It is cut to `max_length` without a
    trailing hyphen. May return an empty string.
    """
    return _slugify(text or "", max_length=max_length)


def file_extension(filename: str) -> str:
    return os.path.splitext(filename)[1].lower()


def validate_file_type(filename: str, content_type: str) -> bool:
    """Both the MIME type and the extension have to be an allowed image type."""
    return (
        content_type in ALLOWED_CONTENT_TYPES
        and file_extension(filename) in ALLOWED_EXTENSIONS
    )


def validate_file_size(size: int, max_size: int = settings.UPLOAD_MAX_SIZE) -> bool:
    return size <= max_size


def generate_random_string(length: int = 32) -> str:
    chars = string.ascii_letters + string.digits
    return "".join(secrets.choice(chars) for _ in range(length))


def unique_filename(filename: str) -> str:
    """<epoch-ms>-<16 random chars><original extension>"""
    return f"{int(time.time() * 1000)}-{generate_random_string(16)}{file_extension(filename)}"
