"""
Face domain model.
Represents a face detected by the backend in one uploaded asset.
"""

from typing import Optional
from pydantic import BaseModel, Field, model_validator

from models.domain.person import Person


UNKNOWN_LABEL = "unknown"


class BoundingBox(BaseModel):
    """Face bounding box in corner (x1, y1, x2, y2) form."""

    x1: float = Field(..., description="Left edge X coordinate")
    y1: float = Field(..., description="Top edge Y coordinate")
    x2: float = Field(..., description="Right edge X coordinate")
    y2: float = Field(..., description="Bottom edge Y coordinate")

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1

    @property
    def area(self) -> float:
        """Bounding box area."""
        return self.width * self.height

    def to_tlwh(self) -> dict:
        """Convert to top/left/width/height form."""
        return {
            "top": self.y1,
            "left": self.x1,
            "width": self.width,
            "height": self.height,
        }

    class Config:
        frozen = True  # Immutable


class Face(BaseModel):
    """
    Detected face as returned by ``GET /api/faces``.

    Field names follow the backend's camelCase schema through aliases;
    unknown fields (``sourceType`` etc.) are ignored.
    """

    id: str = Field(..., description="Backend face ID")
    bounding_box_x1: float = Field(..., alias="boundingBoxX1")
    bounding_box_y1: float = Field(..., alias="boundingBoxY1")
    bounding_box_x2: float = Field(..., alias="boundingBoxX2")
    bounding_box_y2: float = Field(..., alias="boundingBoxY2")
    image_width: Optional[int] = Field(None, alias="imageWidth")
    image_height: Optional[int] = Field(None, alias="imageHeight")
    person: Optional[Person] = Field(None, description="Bound identity, if any")

    @model_validator(mode="after")
    def _check_corners(self) -> "Face":
        if self.bounding_box_x2 < self.bounding_box_x1 or self.bounding_box_y2 < self.bounding_box_y1:
            raise ValueError("bounding box corners are inverted")
        return self

    @property
    def bbox(self) -> BoundingBox:
        return BoundingBox(
            x1=self.bounding_box_x1,
            y1=self.bounding_box_y1,
            x2=self.bounding_box_x2,
            y2=self.bounding_box_y2,
        )

    @property
    def label(self) -> str:
        """Name of the bound identity, or the unknown sentinel."""
        if self.person is not None and self.person.name:
            return self.person.name
        return UNKNOWN_LABEL

    class Config:
        frozen = True
        populate_by_name = True
        extra = "ignore"
