"""
Detector adapter endpoints.
- POST /api/detectors/{name}/recognize
- POST /api/detectors/{name}/train
- POST /api/detectors/{name}/remove
- POST /api/detectors/{name}/normalize
"""

from fastapi import APIRouter, Depends

from core.logging import get_logger
from core.responses import ApiResponse
from models.requests.detection import (
    NormalizeRequest,
    RecognizeRequest,
    RemoveRequest,
    TrainRequest,
)
from repositories.train_repo import TrainRepository, get_train_repository
from services.detectors import get_detector

logger = get_logger(__name__)
router = APIRouter(prefix="/api/detectors", tags=["detectors"])


def get_repository() -> TrainRepository:
    """Dependency for FastAPI endpoints"""
    return get_train_repository()


@router.post("/{name}/recognize")
def recognize(name: str, request: RecognizeRequest):
    """Upload an image and return the raw faces found in it"""
    detector = get_detector(name)
    result = detector.recognize(request.key)
    logger.info(f"[Detectors] {name} recognize: {len(result.data)} face(s)")
    return ApiResponse.ok(result.model_dump())


@router.post("/{name}/train")
def train(
    name: str,
    request: TrainRequest,
    repo: TrainRepository = Depends(get_repository),
):
    """Train an identity; the train record is stored on success"""
    detector = get_detector(name)
    result = detector.train(request.name, request.key)

    if not result.ok:
        return ApiResponse(
            success=False,
            data=result.model_dump(),
            error=result.data.get("error"),
            code="NO_FACE_DETECTED",
        )

    if request.file_id:
        repo.add(request.file_id, request.name, result.data)
    return ApiResponse.ok(result.model_dump())


@router.post("/{name}/remove")
def remove(name: str, request: RemoveRequest):
    """Delete backend assets of the given (or all) train records"""
    detector = get_detector(name)
    outcome = detector.remove(request.ids)
    return ApiResponse.ok(outcome.model_dump() if outcome else None)


@router.post("/{name}/normalize")
def normalize(name: str, request: NormalizeRequest):
    """Convert raw faces into match records"""
    detector = get_detector(name)
    records = detector.normalize(request.camera, request.data)
    return ApiResponse.ok([record.to_dict() for record in records])
