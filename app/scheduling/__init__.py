"""스케줄링 코어 패키지 — 주간 근무 그리드의 상호작용 로직.

Scheduling core package — UI-framework-agnostic interaction logic of the
weekly shift grid: time geometry, overlap validation, the gesture state
machine, the create / resize / move controllers, and the preview.
"""

from app.scheduling.board import ScheduleBoard, ShiftBlock
from app.scheduling.gateway import HttpShiftGateway, ShiftGateway
from app.scheduling.gestures import (
    CommitOutcome,
    GestureTarget,
    GridGeometry,
    PointerEventSource,
    PointerSample,
)
from app.scheduling.overlap import has_conflict, has_conflict_by_time
from app.scheduling.preview import PreviewState, ShiftPreview
from app.scheduling.time_grid import TimeGridModel, TimeSlot

__all__ = [
    "CommitOutcome",
    "GestureTarget",
    "GridGeometry",
    "HttpShiftGateway",
    "PointerEventSource",
    "PointerSample",
    "PreviewState",
    "ScheduleBoard",
    "ShiftBlock",
    "ShiftGateway",
    "ShiftPreview",
    "TimeGridModel",
    "TimeSlot",
    "has_conflict",
    "has_conflict_by_time",
]
