"""Upload API schemas."""

from pydantic import BaseModel, Field

from costumetrack.core.constants import MAX_URL_LENGTH


class UploadResponse(BaseModel):
    url: str
    key: str


class UploadDelete(BaseModel):
    url: str = Field(..., min_length=1, max_length=MAX_URL_LENGTH)
