"""
Purpose:
- The description service: two thin adapters (remote URL, uploaded file) that both
  end in one VisionRequest and one provider call.
- Upload validation lives here: presence -> MIME type -> size, in that order.
"""

from __future__ import annotations
import logging
from typing import Optional, Union
from starlette.datastructures import UploadFile

from ..core.errors import ImageTooLarge, InvalidImageType, NoImageProvided
from .provider import VisionProvider
from .schema import ALLOWED_MIME, DescriptionResult, UploadedImage, VisionRequest

logger = logging.getLogger(__name__)

FormField = Union[UploadFile, str, None]

async def read_upload(field: FormField, upload_limit: int) -> UploadedImage:
    """
    Validate the multipart `image` field and return its bytes.
    A plain (non-file) form value has no content type, so it fails the type check.
    """
    if not field:
        raise NoImageProvided()
    mime = field.content_type if isinstance(field, UploadFile) else None
    if not mime or not ALLOWED_MIME.match(mime):
        logger.info("Rejected upload: content type %r", mime)
        raise InvalidImageType()

    size = field.size
    data = b""
    if size is None or size <= upload_limit:
        data = await field.read()
        size = len(data)
    if size > upload_limit:
        logger.info("Rejected upload: %d bytes over limit %d", size, upload_limit)
        raise ImageTooLarge()
    return UploadedImage(mime_type=mime, byte_size=size, data=data)

class DescriptionService:
    def __init__(self, provider: VisionProvider, upload_limit: int):
        self.provider = provider
        self.upload_limit = upload_limit

    async def describe_url(self, image_url: str, lang: Optional[str] = None) -> DescriptionResult:
        # remote resource is handed to the provider as-is, never fetched here
        request = VisionRequest(image_reference=image_url, target_language=lang or None)
        return DescriptionResult(description=await self.provider.describe(request))

    async def describe_upload(self, field: FormField, lang: Optional[str] = None) -> DescriptionResult:
        image = await read_upload(field, self.upload_limit)
        request = VisionRequest(image_reference=image.to_data_uri(), target_language=lang or None)
        return DescriptionResult(description=await self.provider.describe(request))
