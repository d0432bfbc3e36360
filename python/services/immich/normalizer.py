"""
Result normalization: raw backend faces -> canonical match records.

The backend reports identity binding, not a similarity score, so confidence
is binarized: 100 when a face is bound to a named person, 0 otherwise.
"""

from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from core.config import CameraThresholds, DetectSettings
from core.logging import get_logger
from models.domain.face import UNKNOWN_LABEL, Face
from models.responses.detection import MatchBox, MatchRecord
from services.checks import REJECT, DecisionCheck, DecisionContext, no_checks

logger = get_logger(__name__)

NO_FACE_ERROR = "No face found in image"


class ResultNormalizer:
    """Applies per-camera MATCH / UNKNOWN thresholds and decision checks."""

    def __init__(self, detect: DetectSettings, checks: DecisionCheck = no_checks):
        self.detect = detect
        self.checks = checks

    def normalize(self, camera: Optional[str], data: Any) -> List[MatchRecord]:
        """
        Normalize the faces of one recognize call.

        Args:
            camera: Camera name used to pick thresholds
            data: List of raw faces, or a recognize result ``{"data": [...]}``

        Returns:
            One record per face in input order, minus rejected ones.
            Malformed input yields an empty list.
        """
        faces = self._parse(data)
        if not faces:
            return []

        thresholds = self.detect.for_camera(camera)
        records = []
        for face in faces:
            record = self._normalize_face(face, thresholds, camera)
            if record is not None:
                records.append(record)
        return records

    def _normalize_face(
        self,
        face: Face,
        thresholds: CameraThresholds,
        camera: Optional[str],
    ) -> Optional[MatchRecord]:
        label = face.label
        confidence = round(100.0 if label != UNKNOWN_LABEL else 0.0, 2)
        bbox = face.bbox

        name = label.lower() if confidence >= thresholds.unknown.confidence else UNKNOWN_LABEL
        match = (
            label != UNKNOWN_LABEL
            and confidence >= thresholds.match.confidence
            and bbox.area >= thresholds.match.min_area
        )
        box = MatchBox(**bbox.to_tlwh())

        outcome = self.checks(DecisionContext(
            match_threshold=thresholds.match,
            unknown_threshold=thresholds.unknown,
            camera=camera,
            name=name,
            confidence=confidence,
            match=match,
            box=box.model_dump(),
        ))
        if outcome is REJECT:
            logger.debug(f"[Normalizer] Face {face.id} rejected by checks")
            return None

        return MatchRecord(
            name=name,
            confidence=confidence,
            match=match,
            box=box,
            checks=list(outcome or []) or None,
        )

    def _parse(self, data: Any) -> List[Face]:
        if isinstance(data, dict):
            if data.get("success") is False:
                if data.get("code") == 500 and data.get("error") == NO_FACE_ERROR:
                    logger.info("[Normalizer] Backend found no face in the image")
                else:
                    logger.warning(f"[Normalizer] Unexpected backend data: {data.get('error')}")
                return []
            if "data" not in data:
                logger.warning("[Normalizer] Unexpected backend data: no 'data' field")
                return []
            data = data["data"]

        if data is None:
            data = []
        if not isinstance(data, list):
            logger.warning(f"[Normalizer] Unexpected faces payload: {type(data).__name__}")
            return []
        if not data:
            logger.info("[Normalizer] No faces to normalize")
            return []

        try:
            return [Face.model_validate(raw) for raw in data]
        except PydanticValidationError as e:
            logger.warning(f"[Normalizer] Malformed face data ({e.error_count()} error(s)), ignoring")
            return []
