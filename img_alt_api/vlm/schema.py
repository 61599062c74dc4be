"""
Purpose:
- Request-scoped types for the description flow.
- Pydantic models for the JSON replies so the API is self-documenting.
"""

from __future__ import annotations
import base64
import re
from dataclasses import dataclass
from typing import Optional
from pydantic import BaseModel

ALLOWED_MIME = re.compile(r"^image/(png|jpeg|webp|gif)$")
IMAGE_URL = re.compile(r"^https?://", re.IGNORECASE)

def is_image_url(value: Optional[str]) -> bool:
    return bool(value) and IMAGE_URL.match(value) is not None

@dataclass(frozen=True)
class VisionRequest:
    image_reference: str                    # http(s) URL or data: URI
    target_language: Optional[str] = None

    @property
    def reference_kind(self) -> str:
        return "data" if self.image_reference.startswith("data:") else "url"

@dataclass(frozen=True)
class UploadedImage:
    mime_type: str
    byte_size: int
    data: bytes

    def to_data_uri(self) -> str:
        payload = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{payload}"

class DescriptionResult(BaseModel):
    description: str

class ApiError(BaseModel):
    error: str

class ServiceInfo(BaseModel):
    name: str = "img-alt-api"
