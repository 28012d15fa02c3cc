"""리사이즈 제스처 테스트.

Resize gesture tests — dragging a shift's bottom handle.
"""

from app.scheduling.board import ScheduleBoard
from app.scheduling.gestures import CommitOutcome, Idle, PointerSample, Resizing
from app.scheduling.signals import SAME_EMPLOYEE_OVERLAP

from tests.conftest import MONDAY, at, cell_x, make_shift, slot_y

HANDLE = PointerSample(cell_x(0), slot_y(10 * 60) - 12)


def _drag(board: ScheduleBoard, dy: float) -> PointerSample:
    sample = PointerSample(HANDLE.x, HANDLE.y + dy)
    board.pointer_move(sample)
    return sample


class TestResizePreview:
    """미리보기 테스트."""

    def test_begin_enters_resizing(self, board: ScheduleBoard):
        assert board.start_resize("s-1", HANDLE)
        assert isinstance(board.gesture, Resizing)
        assert board.gesture.original_end == at(MONDAY, 10)

    def test_45px_rounds_to_half_hour(self, board: ScheduleBoard):
        """45px 아래로 → +28분 → 10:30으로 스냅."""
        board.start_resize("s-1", HANDLE)
        _drag(board, 45)
        preview = board.preview.current
        assert preview.shift_id == "s-1"
        assert (preview.start_time, preview.end_time) == (at(MONDAY, 9), at(MONDAY, 10, 30))

    def test_recomputed_from_origin(self, board: ScheduleBoard):
        """이동마다 원점 기준으로 다시 계산 (누적 오차 없음)."""
        board.start_resize("s-1", HANDLE)
        for _ in range(5):
            _drag(board, 45)
        assert board.preview.current.end_time == at(MONDAY, 10, 30)
        _drag(board, 0)
        assert board.preview.current.end_time == at(MONDAY, 10)

    def test_min_one_slot(self, board: ScheduleBoard):
        """종료는 시작 + 30분 이상."""
        board.start_resize("s-1", HANDLE)
        _drag(board, -500)
        assert board.preview.current.end_time == at(MONDAY, 9, 30)

    def test_clamped_to_close(self, board: ScheduleBoard):
        board.start_resize("s-1", HANDLE)
        _drag(board, 5000)
        assert board.preview.current.end_time == at(MONDAY, 21)

    def test_preview_does_not_touch_authoritative_list(self, board: ScheduleBoard, monday_shift):
        board.start_resize("s-1", HANDLE)
        _drag(board, 96)
        assert board.shifts == [monday_shift]
        block = board.blocks_for_day(MONDAY)[0]
        assert block.is_preview
        assert block.shift.end_time == at(MONDAY, 11)
        assert block.rect.height == 192


class TestResizeCommit:
    """놓기 처리 테스트."""

    async def test_commit_calls_update_once(self, board: ScheduleBoard, gateway):
        """10:30으로 놓으면 update_shift(end_time=10:30) 한 번 호출."""
        board.start_resize("s-1", HANDLE)
        _drag(board, 45)
        outcome = await board.pointer_up(PointerSample(HANDLE.x, HANDLE.y + 45))
        assert outcome is CommitOutcome.COMMITTED
        assert len(gateway.updated) == 1
        shift_id, patch = gateway.updated[0]
        assert shift_id == "s-1"
        assert patch.model_dump(exclude_unset=True) == {"end_time": at(MONDAY, 10, 30)}
        assert board.preview.current is None
        assert isinstance(board.gesture, Idle)

    async def test_release_at_origin_is_unchanged(self, board: ScheduleBoard, gateway):
        board.start_resize("s-1", HANDLE)
        assert await board.pointer_up(HANDLE) is CommitOutcome.UNCHANGED
        assert gateway.updated == []

    async def test_conflict_aborts(self, board: ScheduleBoard, gateway, warned, monday_shift):
        """같은 직원의 다음 근무와 겹치면 중단 + 경고."""
        board.set_shifts([monday_shift, make_shift("s-2", "emp-1", at(MONDAY, 11), at(MONDAY, 12))])
        board.start_resize("s-1", HANDLE)
        _drag(board, 144)
        outcome = await board.pointer_up(PointerSample(HANDLE.x, HANDLE.y + 144))
        assert outcome is CommitOutcome.CONFLICT
        assert gateway.updated == []
        assert warned == [SAME_EMPLOYEE_OVERLAP]
        assert board.preview.current is None

    async def test_touching_next_shift_allowed(self, board: ScheduleBoard, gateway, monday_shift):
        board.set_shifts([monday_shift, make_shift("s-2", "emp-1", at(MONDAY, 11), at(MONDAY, 12))])
        board.start_resize("s-1", HANDLE)
        outcome = await board.pointer_up(PointerSample(HANDLE.x, HANDLE.y + 96))
        assert outcome is CommitOutcome.COMMITTED
        assert gateway.updated[0][1].end_time == at(MONDAY, 11)

    async def test_vanished_shift_is_stale(self, board: ScheduleBoard, gateway, warned):
        """근무가 목록에서 사라지면 조용히 중단."""
        board.start_resize("s-1", HANDLE)
        _drag(board, 48)
        board.set_shifts([])
        outcome = await board.pointer_up(PointerSample(HANDLE.x, HANDLE.y + 48))
        assert outcome is CommitOutcome.STALE
        assert gateway.updated == []
        assert warned == []
        assert board.preview.current is None

    async def test_gateway_failure_reported(self, board: ScheduleBoard, gateway, monday_shift):
        """저장 실패 시 FAILED, 권위 목록은 원래대로."""
        gateway.fail_update = True
        board.start_resize("s-1", HANDLE)
        outcome = await board.pointer_up(PointerSample(HANDLE.x, HANDLE.y + 48))
        assert outcome is CommitOutcome.FAILED
        assert board.shifts == [monday_shift]
        assert board.preview.current is None
        assert isinstance(board.gesture, Idle)

    async def test_unknown_shift_does_not_start(self, board: ScheduleBoard):
        assert not board.start_resize("missing", HANDLE)
        assert await board.pointer_up(HANDLE) is CommitOutcome.IGNORED
