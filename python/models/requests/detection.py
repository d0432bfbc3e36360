"""
Detector adapter request models.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field


class RecognizeRequest(BaseModel):
    key: str = Field(..., description="Local path of the image to recognize")


class TrainRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Identity label")
    key: str = Field(..., description="Local path of the training image")
    file_id: Optional[str] = Field(None, description="Train record ID to store on success")


class RemoveRequest(BaseModel):
    ids: List[str] = Field(default_factory=list, description="Train record file IDs; empty = all")


class NormalizeRequest(BaseModel):
    camera: Optional[str] = None
    data: Any = None
