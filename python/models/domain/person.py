"""
Person domain model.
Represents a named identity in the backend's recognition index.
"""

from typing import Optional
from pydantic import BaseModel, Field


class Person(BaseModel):
    """Backend-owned person (identity)."""

    id: str = Field(..., description="Backend person ID")
    name: Optional[str] = Field(None, description="Display name, empty when unnamed")
    is_hidden: bool = Field(False, alias="isHidden", description="Hidden in the backend UI")

    def matches(self, name: str) -> bool:
        """Exact display-name match."""
        return self.name == name

    class Config:
        frozen = True
        populate_by_name = True
        extra = "ignore"
