"""보드가 외부로 내보내는 사용자 신호.

User-facing signals the board emits. The channel (toast, banner) belongs to
the UI adapter; the core only passes a message key or the shift to edit.
"""

import logging
from collections.abc import Callable

from app.schemas.schedule import ShiftResponse

logger = logging.getLogger(__name__)

# 겹침 경고 메시지 키 — Message key of the overlap warning
SAME_EMPLOYEE_OVERLAP: str = "same-employee overlap"

WarningSink = Callable[[str], None]
EditOpener = Callable[[ShiftResponse], None]


def log_warning(message_key: str) -> None:
    """UI 채널이 연결되지 않았을 때의 기본 경고 싱크."""
    logger.info("Schedule warning: %s", message_key)


def ignore_edit(shift: ShiftResponse) -> None:
    logger.debug("No edit surface attached; click on shift %s ignored", shift.id)
