"""
Purpose:
- Root endpoints of the relay.
  GET  /?image=<url>&lang=<code>   describe a remote image (or identify the service); HEAD too
  POST /?lang=<code>               describe a multipart upload in field `image`
- Errors are raised as DescriptionError and rendered by main.py as ApiError.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from ..vlm.describer import DescriptionService
from ..vlm.schema import ApiError, DescriptionResult, ServiceInfo, is_image_url

router = APIRouter(tags=["describe"])

def get_description_service(request: Request) -> DescriptionService:
    return request.app.state.description_service

@router.api_route(
    "/",
    methods=["GET", "HEAD"],
    responses={500: {"model": ApiError}},
)
async def describe_or_identify(
    image: Optional[str] = Query(default=None, description="http(s) URL of the image"),
    lang: Optional[str] = Query(default=None, description="Answer language code"),
    service: DescriptionService = Depends(get_description_service),
):
    if is_image_url(image):
        return await service.describe_url(image, lang)
    return ServiceInfo()

@router.post(
    "/",
    response_model=DescriptionResult,
    responses={400: {"model": ApiError}, 500: {"model": ApiError}},
)
async def describe_upload(
    request: Request,
    lang: Optional[str] = Query(default=None, description="Answer language code"),
    service: DescriptionService = Depends(get_description_service),
):
    async with request.form() as form:
        return await service.describe_upload(form.get("image"), lang)
