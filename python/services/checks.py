"""
Decision checks applied after a match verdict is computed.

A check receives the DecisionContext of one normalized face and returns
either a list of annotations (possibly empty) or REJECT to drop the face
from the output entirely.
"""

from enum import Enum
from typing import Iterable, List, Optional, Protocol, Union

from pydantic import BaseModel

from core.config import Threshold


class Verdict(str, Enum):
    """Non-annotation outcomes of a check."""

    REJECT = "reject"


REJECT = Verdict.REJECT

# None is accepted and treated like an empty list
CheckOutcome = Union[List[str], Verdict, None]


class DecisionContext(BaseModel):
    """Fields a check may base its decision on."""

    match_threshold: Threshold
    unknown_threshold: Threshold
    camera: Optional[str] = None
    name: str
    confidence: float
    match: bool
    box: dict


class DecisionCheck(Protocol):
    def __call__(self, context: DecisionContext) -> CheckOutcome:
        ...


def no_checks(context: DecisionContext) -> CheckOutcome:
    """Default check: never annotates, never rejects."""
    return []


class CompositeCheck:
    """
    Run several checks in order.

    Annotations are concatenated; the first REJECT short-circuits.
    """

    def __init__(self, checks: Iterable[DecisionCheck]):
        self.checks = list(checks)

    def __call__(self, context: DecisionContext) -> CheckOutcome:
        annotations: List[str] = []
        for check in self.checks:
            outcome = check(context)
            if outcome is REJECT:
                return REJECT
            annotations.extend(outcome or [])
        return annotations


class UnknownMinAreaCheck:
    """
    Annotate unknown faces whose box is smaller than UNKNOWN.min_area.

    With ``reject=True`` such faces are dropped instead.
    """

    ANNOTATION = "below unknown min area"

    def __init__(self, reject: bool = False):
        self.reject = reject

    def __call__(self, context: DecisionContext) -> CheckOutcome:
        if context.name != "unknown":
            return []
        area = context.box["width"] * context.box["height"]
        if area >= context.unknown_threshold.min_area:
            return []
        return REJECT if self.reject else [self.ANNOTATION]
