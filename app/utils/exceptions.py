"""커스텀 예외 클래스 모듈.

Custom exception classes module.
Provides pre-configured HTTPException subclasses for the shift store API
and the client-side gateway error raised by persistence gateways.

Usage:
    from app.utils.exceptions import NotFoundError, ConflictError
    raise NotFoundError("Shift not found")
    raise ConflictError("same-employee overlap")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested resource (business, employee, shift) does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    """409 Conflict 예외 — 같은 직원의 근무가 겹칠 때 사용.

    409 Conflict exception.
    Raised when a shift would overlap another shift of the same employee
    on the same day.

    Args:
        detail: 오류 메시지 (Error message, default: "same-employee overlap")
    """

    def __init__(self, detail: str = "same-employee overlap") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request data is invalid beyond what Pydantic validation catches
    (e.g. shift outside business hours, off-grid times, zero-length shifts).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class GatewayError(Exception):
    """영속성 게이트웨이 실패 예외.

    Raised by a shift gateway when a mutating call fails, so callers can tell
    a rejected write apart from a successful no-op.

    Args:
        detail: 오류 메시지 (Error message)
        status_code: 원격 응답 코드, 없으면 None (Remote status code, if any)
    """

    def __init__(self, detail: str = "Shift gateway request failed", status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail: str = detail
        self.status_code: int | None = status_code
