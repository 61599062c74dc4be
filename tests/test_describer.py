import base64
import io

import pytest
from starlette.datastructures import Headers, UploadFile

from img_alt_api.core.errors import ImageTooLarge, InvalidImageType, NoImageProvided
from img_alt_api.vlm.describer import DescriptionService, read_upload
from img_alt_api.vlm.schema import UploadedImage, is_image_url

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


def make_upload(data: bytes, content_type: str | None = "image/png", size: int | None = None) -> UploadFile:
    headers = Headers({"content-type": content_type}) if content_type else Headers({})
    return UploadFile(
        file=io.BytesIO(data),
        size=len(data) if size is None else size,
        filename="upload",
        headers=headers,
    )


# ── URL pattern ───────────────────────────────────────────────────────────────


@pytest.mark.parametrize("value", ["https://example.com/cat.jpg", "http://x.y/z.png", "HTTPS://EXAMPLE.COM/a"])
def test_is_image_url_accepts_http_urls(value):
    assert is_image_url(value)


@pytest.mark.parametrize("value", [None, "", "cat.jpg", "ftp://example.com/cat.jpg", "see https://x.y"])
def test_is_image_url_rejects_everything_else(value):
    assert not is_image_url(value)


def test_uploaded_image_to_data_uri():
    image = UploadedImage(mime_type="image/gif", byte_size=3, data=b"GIF")

    assert image.to_data_uri() == "data:image/gif;base64," + base64.b64encode(b"GIF").decode()


# ── upload validation ─────────────────────────────────────────────────────────


@pytest.mark.parametrize("field", [None, ""])
async def test_read_upload_missing_field(field):
    with pytest.raises(NoImageProvided):
        await read_upload(field, upload_limit=1024)


@pytest.mark.parametrize("content_type", ["image/svg+xml", "image/bmp", "application/pdf", "text/plain", None])
async def test_read_upload_rejects_disallowed_types(content_type):
    with pytest.raises(InvalidImageType):
        await read_upload(make_upload(PNG, content_type=content_type), upload_limit=1024)


async def test_read_upload_plain_form_value_is_invalid_type():
    with pytest.raises(InvalidImageType):
        await read_upload("https://example.com/cat.jpg", upload_limit=1024)


async def test_read_upload_type_checked_before_size():
    big = make_upload(b"x" * 4096, content_type="text/plain")

    with pytest.raises(InvalidImageType):
        await read_upload(big, upload_limit=1024)


async def test_read_upload_rejects_oversized():
    with pytest.raises(ImageTooLarge):
        await read_upload(make_upload(b"x" * 1025, content_type="image/jpeg"), upload_limit=1024)


async def test_read_upload_measures_bytes_when_size_unknown():
    upload = UploadFile(file=io.BytesIO(b"x" * 2048), headers=Headers({"content-type": "image/webp"}))

    with pytest.raises(ImageTooLarge):
        await read_upload(upload, upload_limit=1024)


@pytest.mark.parametrize("content_type", ["image/png", "image/jpeg", "image/webp", "image/gif"])
async def test_read_upload_accepts_allowed_types_at_limit(content_type):
    data = b"y" * 1024

    image = await read_upload(make_upload(data, content_type=content_type), upload_limit=1024)

    assert image == UploadedImage(mime_type=content_type, byte_size=1024, data=data)


# ── service adapters ──────────────────────────────────────────────────────────


async def test_describe_url_builds_url_request(provider):
    service = DescriptionService(provider, upload_limit=1024)

    result = await service.describe_url("https://example.com/cat.jpg", "de")

    assert result.description == provider.reply
    (request,) = provider.calls
    assert request.image_reference == "https://example.com/cat.jpg"
    assert request.target_language == "de"
    assert request.reference_kind == "url"


async def test_describe_upload_builds_data_uri_request(provider):
    service = DescriptionService(provider, upload_limit=1024)

    await service.describe_upload(make_upload(PNG), None)

    (request,) = provider.calls
    assert request.image_reference == "data:image/png;base64," + base64.b64encode(PNG).decode()
    assert request.target_language is None
    assert request.reference_kind == "data"


async def test_describe_upload_invalid_never_calls_provider(provider):
    service = DescriptionService(provider, upload_limit=4)

    with pytest.raises(ImageTooLarge):
        await service.describe_upload(make_upload(PNG), "fr")

    assert provider.calls == []
