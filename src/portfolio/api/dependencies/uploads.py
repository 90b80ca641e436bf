"""Multipart image upload dependency.

Enforces the upload constraints before the service ever sees the file.
"""

from typing import Annotated

from fastapi import Depends, File, UploadFile

from src.portfolio.api.dependencies.context import AppContextDep
from src.portfolio.core.exceptions import ValidationError
from src.portfolio.core.media import IMAGE_EXTENSIONS, ImageUpload

UNSUPPORTED_TYPE_MESSAGE = "Only image files are allowed (jpeg, jpg, png, webp)"
EMPTY_IMAGE_MESSAGE = "Image file is empty"


async def get_image_upload(
    context: AppContextDep,
    image: Annotated[UploadFile | None, File(description="Optional project image")] = None,
) -> ImageUpload | None:
    """Read the optional `image` file field into an ImageUpload.

    Raises:
        ValidationError: Unsupported content type, or a file that is empty or over the size limit.
    """
    if image is None or not image.filename:
        return None

    max_bytes = context.settings.media_max_bytes
    try:
        content_type = (image.content_type or "").lower()
        if content_type not in IMAGE_EXTENSIONS:
            raise ValidationError(UNSUPPORTED_TYPE_MESSAGE, error={"image": content_type})

        data = await image.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise ValidationError(
                f"Image must be {max_bytes // (1024 * 1024)}MB or smaller",
                error={"image": "file too large"},
            )
        if not data:
            raise ValidationError(EMPTY_IMAGE_MESSAGE, error={"image": "empty file"})
    finally:
        await image.close()

    return ImageUpload(data=data, content_type=content_type, filename=image.filename)


OptionalImage = Annotated[ImageUpload | None, Depends(get_image_upload)]
