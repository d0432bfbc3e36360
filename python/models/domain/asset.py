"""
Asset domain model.
Result of uploading one image to the backend.
"""

from pydantic import BaseModel, Field


ASSET_CREATED = "created"


class AssetUpload(BaseModel):
    """Response of ``POST /api/assets``."""

    id: str = Field(..., description="Backend asset ID")
    status: str = Field("", description="created / duplicate / ...")

    @property
    def is_created(self) -> bool:
        return self.status == ASSET_CREATED

    class Config:
        extra = "ignore"
