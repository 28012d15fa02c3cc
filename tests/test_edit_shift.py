"""근무 편집 화면 테스트.

Shift edit surface tests — typed times, rounding, validation, save/delete.
"""

import pytest

from app.scheduling.edit import (
    END_MUST_BE_AFTER_START,
    INVALID_TIME_FORMAT,
    OUTSIDE_BUSINESS_HOURS,
    SAVE_FAILED,
    ShiftEditor,
    parse_time_hhmm,
    round_to_half_hour,
)
from app.scheduling.signals import SAME_EMPLOYEE_OVERLAP
from app.schemas.business import WeekTimeRange

from tests.conftest import MONDAY, TUESDAY, at, make_shift


@pytest.fixture
def shift():
    return make_shift("s-1", "emp-1", at(MONDAY, 9), at(MONDAY, 10))


@pytest.fixture
def editor(gateway, shift) -> ShiftEditor:
    others = [shift, make_shift("s-2", "emp-1", at(MONDAY, 14), at(MONDAY, 16))]
    return ShiftEditor(gateway, all_shifts=others)


class TestParsing:
    def test_parse_time(self):
        assert parse_time_hhmm("9:05") == (9, 5)
        assert parse_time_hhmm("24:00") is None
        assert parse_time_hhmm("9.30") is None
        assert parse_time_hhmm("") is None

    def test_round_to_half_hour(self):
        assert round_to_half_hour(9, 14) == (9, 0)
        assert round_to_half_hour(9, 15) == (9, 30)
        assert round_to_half_hour(23, 50) == (0, 0)


class TestResolve:
    """입력 검증 테스트."""

    def test_rounded_times_on_shift_day(self, editor: ShiftEditor, shift):
        assert editor.resolve(shift, "10:10", "12:50") == (at(MONDAY, 10), at(MONDAY, 13))

    def test_invalid_format(self, editor: ShiftEditor, shift):
        assert editor.resolve(shift, "ten", "12:00") == INVALID_TIME_FORMAT

    def test_end_before_start_rolls_to_next_day(self, editor: ShiftEditor, shift):
        """종료가 시작보다 이르면 다음날로."""
        assert editor.resolve(shift, "22:00", "02:00") == (at(MONDAY, 22), at(TUESDAY, 2))

    def test_rounding_collapse_rejected(self, editor: ShiftEditor, shift):
        assert editor.resolve(shift, "10:00", "10:10") == END_MUST_BE_AFTER_START

    def test_outside_business_hours(self, gateway, shift):
        editor = ShiftEditor(gateway, time_range=WeekTimeRange(start_minutes=420, end_minutes=1260))
        assert editor.resolve(shift, "06:00", "09:00") == OUTSIDE_BUSINESS_HOURS
        assert editor.resolve(shift, "20:00", "21:00") == (at(MONDAY, 20), at(MONDAY, 21))

    def test_overlap_with_own_other_shift(self, editor: ShiftEditor, shift):
        assert editor.resolve(shift, "13:00", "15:00") == SAME_EMPLOYEE_OVERLAP
        assert editor.resolve(shift, "09:00", "14:00") == (at(MONDAY, 9), at(MONDAY, 14))


class TestSave:
    """저장/삭제 테스트."""

    async def test_save_sends_times_and_notes(self, editor: ShiftEditor, gateway, shift):
        result = await editor.save(shift, "08:00", "11:30", notes="  opening  ")
        assert result.ok
        shift_id, patch = gateway.updated[0]
        assert shift_id == "s-1"
        assert (patch.start_time, patch.end_time, patch.notes) == (at(MONDAY, 8), at(MONDAY, 11, 30), "opening")

    async def test_blank_notes_cleared(self, editor: ShiftEditor, gateway, shift):
        await editor.save(shift, "08:00", "11:30", notes="   ")
        assert gateway.updated[0][1].model_dump(exclude_unset=True)["notes"] is None

    async def test_validation_error_not_sent(self, editor: ShiftEditor, gateway, shift):
        result = await editor.save(shift, "x", "y")
        assert not result.ok and result.error == INVALID_TIME_FORMAT
        assert gateway.updated == []

    async def test_gateway_failure(self, editor: ShiftEditor, gateway, shift):
        gateway.fail_update = True
        result = await editor.save(shift, "08:00", "09:00")
        assert result.error == SAVE_FAILED

    async def test_delete(self, editor: ShiftEditor, gateway, shift):
        assert await editor.delete(shift)
        assert gateway.deleted == ["s-1"]
