"""커스텀 예외 클래스 모듈.

Custom exception classes module.
HTTP-facing errors are pre-configured HTTPException subclasses; the
repository layer raises NonUniqueResultError, which the application maps
to a 409 response.

Usage:
    from roster.utils.exceptions import NotFoundError, NonUniqueResultError
    raise NotFoundError("Member not found")
"""

from fastapi import HTTPException, status


class NonUniqueResultError(Exception):
    """단건 조회 결과가 2건 이상일 때 발생하는 예외.

    Raised when a single-result query matches more than one row.
    Zero matches are not an error: single-result queries return None.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "Query did not return a unique result") -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested member or team does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when request data is invalid beyond what Pydantic validation catches
    (e.g. an unknown sort property).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
