"""
Detector adapter response models.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class MatchBox(BaseModel):
    """Canonical box: top/left/width/height in image pixels."""

    top: float
    left: float
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)


class MatchRecord(BaseModel):
    """Backend-agnostic verdict for one detected face."""

    name: str = Field(..., description="Lowercased label or 'unknown'")
    confidence: float = Field(..., ge=0, le=100, description="0-100, two decimals")
    match: bool
    box: MatchBox
    checks: Optional[List[str]] = Field(None, description="Decision check annotations")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, omitting ``checks`` when there are none."""
        return self.model_dump(exclude_none=True)


class RecognizeResult(BaseModel):
    """Raw backend faces for one recognize call."""

    data: List[Dict[str, Any]] = Field(default_factory=list)


class TrainResult(BaseModel):
    """
    Outcome of a train call.

    ``status`` is 200 on success with the uploaded asset in ``data``;
    400 with ``data.error`` when no face was found.
    """

    status: int
    data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == 200
