"""Image API endpoints."""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from ..models import ErrorResponse
from .dependencies import CodeStoreDep
from .schemas import ImageResponse

router = APIRouter(tags=["images"])

_ERRORS = {
    400: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get(
    "/images",
    response_model=list[ImageResponse],
    responses={500: {"model": ErrorResponse}},
)
async def list_images(store: CodeStoreDep) -> list[ImageResponse]:
    """List all stored images. Order is not guaranteed."""
    return [ImageResponse.from_record(record) for record in store.list_images()]


@router.get(
    "/images/{code}",
    response_model=ImageResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_image(code: str, store: CodeStoreDep) -> ImageResponse:
    """Get the image stored for a code."""
    return ImageResponse.from_record(store.get_image(code))


@router.post("/upload", response_model=ImageResponse, responses=_ERRORS)
async def upload_image(
    store: CodeStoreDep,
    image: Annotated[UploadFile | None, File()] = None,
    code: Annotated[str | None, Form()] = None,
) -> ImageResponse:
    """Upload an image under a 4-digit code, replacing any image already stored for it."""
    try:
        record = await store.upload_with_code(image, code)
    finally:
        if image is not None:
            await image.close()
    return ImageResponse.from_record(record)


@router.post("/upload/auto", response_model=ImageResponse, responses=_ERRORS)
async def upload_image_auto(
    store: CodeStoreDep,
    image: Annotated[UploadFile | None, File()] = None,
) -> ImageResponse:
    """Upload an image under a generated code."""
    try:
        record = await store.upload_auto(image)
    finally:
        if image is not None:
            await image.close()
    return ImageResponse.from_record(record)
