import asyncio
import io
from typing import Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi import HTTPException, UploadFile, status
from PIL import Image, UnidentifiedImageError

from backoffice.common.custom_exceptions import BadRequestError, UpstreamError
from backoffice.config.media_config import media_settings
from backoffice.uploads.constants import ALLOWED_DOCUMENT_TYPES, ALLOWED_IMAGE_TYPES, logger

cloudinary.config(
    cloud_name=media_settings.CLOUDINARY_CLOUD_NAME,
    api_key=media_settings.CLOUDINARY_API_KEY,
    api_secret=media_settings.CLOUDINARY_API_SECRET,
    secure=True,
)


async def read_upload(file: UploadFile, allowed_types=ALLOWED_IMAGE_TYPES) -> bytes:
    if file.content_type not in allowed_types:
        logger.warning("upload.rejected_type", extra={"content_type": file.content_type, "upload": file.filename})
        raise BadRequestError(f"Unsupported file type: {file.content_type}")

    content = await file.read()
    if not content:
        raise BadRequestError("Uploaded file is empty")
    if len(content) > media_settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="File too large")
    return content


def _verify_image(content: bytes) -> None:
    with Image.open(io.BytesIO(content)) as img:
        img.verify()


async def verify_image(content: bytes) -> None:
    try:
        await asyncio.to_thread(_verify_image, content)
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        logger.warning("upload.image_invalid", extra={"error": str(e)})
        raise BadRequestError("Uploaded file is not a valid image")


async def upload_bytes(content: bytes, folder: str, resource_type: str = "image") -> str:
    """Push bytes to cloudinary and return the secure url."""
    target = f"{media_settings.UPLOAD_FOLDER}/{folder}"
    try:
        result = await asyncio.to_thread(
            cloudinary.uploader.upload, content, folder=target, resource_type=resource_type,
        )
    except CloudinaryError as e:
        logger.error("upload.provider_failed", extra={"folder": target, "error": str(e)})
        raise UpstreamError("File upload failed")

    url = result.get("secure_url") or result.get("url")
    if not url:
        raise UpstreamError("File upload failed")
    logger.info("upload.success", extra={"folder": target, "public_id": result.get("public_id")})
    return url


async def upload_image(file: UploadFile, folder: str) -> str:
    content = await read_upload(file, ALLOWED_IMAGE_TYPES)
    await verify_image(content)
    return await upload_bytes(content, folder)


async def upload_document(file: UploadFile, folder: str) -> str:
    content = await read_upload(file, ALLOWED_DOCUMENT_TYPES)
    if file.content_type in ALLOWED_IMAGE_TYPES:
        await verify_image(content)
    return await upload_bytes(content, folder, resource_type="auto")


async def maybe_upload_image(file: Optional[UploadFile], folder: str) -> Optional[str]:
    if file is None or not file.filename:
        return None
    return await upload_image(file, folder)
