"""보드 컨텍스트 — 컨트롤러들이 공유하는 읽기 모델과 협력자.

Board context shared by the create, resize, and move controllers: the
authoritative shift and employee lists (owned by the caller, replaced on
every refresh, never spliced here), the grid geometry, the gesture slot,
the preview state, and the outward collaborators.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from app.scheduling.gateway import ShiftGateway
from app.scheduling.gestures import CommitOutcome, GestureSlot, GridGeometry
from app.scheduling.preview import PreviewState
from app.scheduling.signals import EditOpener, WarningSink, ignore_edit, log_warning
from app.scheduling.time_grid import TimeGridModel
from app.schemas.schedule import EmployeeResponse, ShiftResponse, ShiftUpdate

logger = logging.getLogger(__name__)


@dataclass
class BoardContext:
    """컨트롤러 공유 상태.

    Attributes:
        gateway: 근무 저장소 게이트웨이 (Persistence gateway)
        grid: 시간 그리드 (Grid geometry for the current business window)
        week_days: 표시 중인 날짜들 (Visible days, left to right)
        shifts: 권위 근무 목록 (Authoritative shift list)
        employees: 직원 명부 (Employee roster)
        layout: 그리드 화면 좌표, 어댑터가 제공 (On-screen grid rectangle, if known)
        slot: 활성 제스처 슬롯 (Active gesture slot)
        preview: 미리보기 상태 (Preview state)
        warn: 경고 신호 (Warning signal sink)
        open_edit: 편집 화면 열기 (Edit affordance trigger)
    """

    gateway: ShiftGateway
    grid: TimeGridModel
    week_days: list[date]
    shifts: Sequence[ShiftResponse] = ()
    employees: Sequence[EmployeeResponse] = ()
    layout: GridGeometry | None = None
    slot: GestureSlot = field(default_factory=GestureSlot)
    preview: PreviewState = field(default_factory=PreviewState)
    warn: WarningSink = log_warning
    open_edit: EditOpener = ignore_edit

    def find_shift(self, shift_id: str) -> ShiftResponse | None:
        return next((s for s in self.shifts if s.id == shift_id), None)

    def find_employee(self, employee_id: str) -> EmployeeResponse | None:
        return next((e for e in self.employees if e.id == employee_id), None)

    async def persist_update(self, shift_id: str, patch: ShiftUpdate) -> CommitOutcome:
        """근무 수정을 저장하고 결과를 반환합니다.

        Send an update through the gateway while the shift is marked as
        having a write in flight. A rejected write is logged and reported as
        FAILED; the authoritative list stays the rendered truth.
        """
        async with self.slot.writing(shift_id):
            try:
                await self.gateway.update_shift(shift_id, patch)
            except Exception:
                logger.warning("update_shift %s failed", shift_id, exc_info=True)
                return CommitOutcome.FAILED
        return CommitOutcome.COMMITTED
