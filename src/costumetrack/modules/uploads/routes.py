"""Image upload routes."""

from fastapi import File, UploadFile, status

from costumetrack.config import settings
from costumetrack.core.auth.dependencies import OrgMember
from costumetrack.modules.uploads import router
from costumetrack.modules.uploads.schemas import UploadDelete, UploadResponse
from costumetrack.modules.uploads.services import UploadSvc


@router.post(
    "",
    response_model=UploadResponse,
    summary="Upload image",
    description="Stores an image (at most 4 MB) for costume photos and sketches.",
)
async def upload_image(
    org: OrgMember,
    service: UploadSvc,
    file: UploadFile = File(...),
) -> UploadResponse:
    # Read one byte past the limit so oversized files are detected without
    # buffering them entirely
    content = await file.read(settings.max_upload_bytes + 1)
    return await service.upload_image(org, content, file.filename, file.content_type)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete uploaded image",
    description="Only files uploaded by the caller's organization can be deleted.",
)
async def delete_image(
    data: UploadDelete,
    org: OrgMember,
    service: UploadSvc,
) -> None:
    await service.delete_image(org, data.url)
