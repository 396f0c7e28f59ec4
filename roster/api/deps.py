"""FastAPI 의존성 주입 모듈 — 페이지 요청 파라미터 변환.

FastAPI dependency module — Converts ``page``/``size``/``sort`` query
parameters into a PageRequest using the paging settings.
"""

from typing import Annotated

from fastapi import Query
from pydantic import ValidationError

from roster.config import settings
from roster.utils.exceptions import BadRequestError
from roster.utils.pagination import PageRequest, Sort


def get_page_request(
    page: Annotated[int | None, Query()] = None,
    size: Annotated[int | None, Query()] = None,
    sort: Annotated[list[str] | None, Query()] = None,
) -> PageRequest:
    """쿼리 파라미터를 PageRequest로 변환합니다.

    Build a PageRequest from query parameters.
    Missing values fall back to the first page and DEFAULT_PAGE_SIZE;
    sizes above MAX_PAGE_SIZE are clamped. With ONE_INDEXED_PARAMETERS
    the client's ``page=1`` is the first page.

    Raises:
        BadRequestError: 페이지/크기/정렬 값이 잘못되었을 때 (Invalid page, size or sort)
    """
    number: int = page if page is not None else (1 if settings.ONE_INDEXED_PARAMETERS else 0)
    if settings.ONE_INDEXED_PARAMETERS:
        number -= 1

    page_size: int = size if size is not None else settings.DEFAULT_PAGE_SIZE
    page_size = min(page_size, settings.MAX_PAGE_SIZE)

    try:
        return PageRequest.of(number, page_size, Sort.parse(sort or []))
    except (ValidationError, ValueError) as exc:
        raise BadRequestError(str(exc)) from exc
