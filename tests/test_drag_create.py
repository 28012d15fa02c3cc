"""드래그 생성 테스트.

Drag-create tests — dropping an employee chip on a grid cell.
"""

from app.scheduling.board import ScheduleBoard
from app.scheduling.gestures import CommitOutcome, PointerSample
from app.scheduling.signals import SAME_EMPLOYEE_OVERLAP

from tests.conftest import MONDAY, TUESDAY, at


class TestDrop:
    """직원 드롭 테스트."""

    async def test_drop_creates_default_length_shift(self, board: ScheduleBoard, gateway):
        """드롭한 칸에서 4시간 근무 생성."""
        outcome = await board.drop_employee("emp-2", MONDAY, 9, 30)
        assert outcome is CommitOutcome.COMMITTED
        assert len(gateway.added) == 1
        payload = gateway.added[0]
        assert payload.employee_id == "emp-2"
        assert (payload.start_time, payload.end_time) == (at(MONDAY, 9, 30), at(MONDAY, 13, 30))

    async def test_drop_conflict_rejected(self, board: ScheduleBoard, gateway, warned):
        """월요일 09:00–10:00 근무가 있는 직원을 09:30 칸에 놓으면 거부."""
        outcome = await board.drop_employee("emp-1", MONDAY, 9, 30)
        assert outcome is CommitOutcome.CONFLICT
        assert gateway.added == []
        assert warned == [SAME_EMPLOYEE_OVERLAP]

    async def test_drop_cut_at_close(self, board: ScheduleBoard, gateway):
        """폐점 시각에서 잘림."""
        await board.drop_employee("emp-1", TUESDAY, 19, 0)
        assert gateway.added[0].end_time == at(TUESDAY, 21)

    async def test_drop_last_slot(self, board: ScheduleBoard, gateway):
        await board.drop_employee("emp-1", TUESDAY, 20, 30)
        assert (gateway.added[0].start_time, gateway.added[0].end_time) == (at(TUESDAY, 20, 30), at(TUESDAY, 21))

    async def test_drop_adjacent_allowed(self, board: ScheduleBoard, gateway):
        """기존 근무 종료 시각에 시작하면 허용."""
        outcome = await board.drop_employee("emp-1", MONDAY, 10, 0)
        assert outcome is CommitOutcome.COMMITTED

    async def test_invalid_drag_data_ignored(self, board: ScheduleBoard, gateway):
        """빈 데이터, 모르는 직원, 비활성 직원은 무시."""
        assert await board.drop_employee("", MONDAY, 9, 0) is CommitOutcome.IGNORED
        assert await board.drop_employee("nobody", MONDAY, 9, 0) is CommitOutcome.IGNORED
        assert await board.drop_employee("emp-3", MONDAY, 9, 0) is CommitOutcome.IGNORED
        assert gateway.added == []

    async def test_drop_before_open_ignored(self, board: ScheduleBoard, gateway):
        assert await board.drop_employee("emp-2", MONDAY, 6, 30) is CommitOutcome.IGNORED
        assert gateway.added == []

    async def test_gateway_failure_reported(self, board: ScheduleBoard, gateway):
        """add_shift가 None이면 FAILED, 권위 목록은 그대로."""
        gateway.fail_add = True
        outcome = await board.drop_employee("emp-2", MONDAY, 12, 0)
        assert outcome is CommitOutcome.FAILED
        assert len(board.shifts) == 1

    async def test_drop_while_gesture_active_is_busy(self, board: ScheduleBoard, gateway):
        board.start_move("s-1", PointerSample(100, 300))
        assert await board.drop_employee("emp-2", MONDAY, 12, 0) is CommitOutcome.BUSY
        assert gateway.added == []

    def test_drag_over_reports_copy(self, board: ScheduleBoard):
        assert board.drag_over(MONDAY, board.time_slots[0]) == "copy"
