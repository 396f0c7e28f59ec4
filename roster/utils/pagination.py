"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides sort/page request models, the Page and Slice result models,
and helpers that run a windowed query with or without a count query.

Page numbers are zero-based: ``PageRequest.of(0, 20)`` is the first page.
"""

import math
from enum import Enum
from typing import Any, Callable, Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field
from sqlalchemy import Select, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class Direction(str, Enum):
    """정렬 방향 — Sort direction."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_string(cls, value: str) -> "Direction":
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(f"Invalid sort direction: {value!r}") from None


class Order(BaseModel):
    """단일 정렬 조건 — One ``property direction`` sort clause."""

    model_config = ConfigDict(frozen=True)

    property_name: str
    direction: Direction = Direction.ASC


class Sort(BaseModel):
    """정렬 조건 목록 모델.

    Ordered list of sort clauses applied to a query.

    Usage:
        Sort.by("username", direction=Direction.DESC)
        Sort.parse(["age,desc", "username"])
    """

    model_config = ConfigDict(frozen=True)

    orders: tuple[Order, ...] = ()

    @classmethod
    def by(cls, *properties: str, direction: Direction = Direction.ASC) -> "Sort":
        return cls(orders=tuple(Order(property_name=p, direction=direction) for p in properties))

    @classmethod
    def unsorted(cls) -> "Sort":
        return cls()

    @classmethod
    def parse(cls, values: Sequence[str]) -> "Sort":
        """``sort=prop[,prop...][,asc|desc]`` 형식의 파라미터를 파싱합니다.

        Parse HTTP sort parameters. A trailing direction token applies to
        every property listed before it in the same value.

        Raises:
            ValueError: 속성이 비어있을 때 (A value names no property)
        """
        orders: list[Order] = []
        for value in values:
            tokens: list[str] = [t.strip() for t in value.split(",") if t.strip()]
            direction: Direction = Direction.ASC
            if len(tokens) > 1 and tokens[-1].lower() in ("asc", "desc"):
                direction = Direction.from_string(tokens.pop())
            if not tokens:
                raise ValueError(f"Sort parameter has no property: {value!r}")
            orders.extend(Order(property_name=t, direction=direction) for t in tokens)
        return cls(orders=tuple(orders))

    @property
    def is_sorted(self) -> bool:
        return bool(self.orders)

    def and_(self, other: "Sort") -> "Sort":
        return Sort(orders=self.orders + other.orders)

    def apply(self, query: Select[Any], model: type) -> Select[Any]:
        """쿼리에 ORDER BY를 적용합니다.

        Append ORDER BY clauses for the mapped columns of ``model``.

        Raises:
            ValueError: 매핑되지 않은 속성일 때 (Property is not a mapped column)
        """
        columns = inspect(model).column_attrs
        for order in self.orders:
            if order.property_name not in columns:
                raise ValueError(
                    f"No property '{order.property_name}' found for type '{model.__name__}'"
                )
            column = getattr(model, order.property_name)
            query = query.order_by(column.desc() if order.direction is Direction.DESC else column.asc())
        return query


class PageRequest(BaseModel):
    """페이지 요청 모델.

    Page request: zero-based page number, page size and sort.
    Invalid values raise a pydantic ValidationError (a ValueError).

    Attributes:
        page: 페이지 번호, 0부터 시작 (Page number, 0-indexed)
        size: 페이지 크기 (Page size, at least 1)
        sort: 정렬 조건 (Sort clauses)
    """

    model_config = ConfigDict(frozen=True)

    page: int = Field(0, ge=0)
    size: int = Field(20, ge=1)
    sort: Sort = Field(default_factory=Sort.unsorted)

    @classmethod
    def of(cls, page: int, size: int, sort: Sort | None = None) -> "PageRequest":
        return cls(page=page, size=size, sort=sort or Sort.unsorted())

    @property
    def offset(self) -> int:
        return self.page * self.size

    def next(self) -> "PageRequest":
        return self.model_copy(update={"page": self.page + 1})

    def previous_or_first(self) -> "PageRequest":
        return self.model_copy(update={"page": max(self.page - 1, 0)})

    def first(self) -> "PageRequest":
        return self.model_copy(update={"page": 0})


class Slice(BaseModel, Generic[T]):
    """슬라이스 결과 모델 — 전체 개수 없이 다음 페이지 존재 여부만 제공.

    Slice result: a window of content plus whether another window follows.
    No count query is run to build it.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    content: list[T]
    number: int  # 현재 페이지 번호 — 0부터 시작 (Current page, 0-indexed)
    size: int  # 요청한 페이지 크기 (Requested page size)
    has_next: bool

    @computed_field
    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @computed_field
    @property
    def is_first(self) -> bool:
        return self.number == 0

    @computed_field
    @property
    def is_last(self) -> bool:
        return not self.has_next

    def map(self, converter: Callable[[Any], Any]) -> "Slice[Any]":
        return Slice(
            content=[converter(item) for item in self.content],
            number=self.number,
            size=self.size,
            has_next=self.has_next,
        )


class Page(BaseModel, Generic[T]):
    """페이지네이션 결과 모델.

    Pagination result model: content of one page plus the total count
    across all pages.

    Attributes:
        content: 현재 페이지 항목 목록 (Items for the current page)
        number: 현재 페이지 번호 (Current page number, 0-based)
        size: 요청한 페이지 크기 (Requested page size)
        total_elements: 전체 항목 수 (Total count across all pages)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    content: list[T]
    number: int
    size: int
    total_elements: int

    @computed_field
    @property
    def total_pages(self) -> int:
        # 전체 페이지 수 — ceil(total / size)
        return math.ceil(self.total_elements / self.size) if self.size else 1

    @computed_field
    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @computed_field
    @property
    def is_first(self) -> bool:
        return self.number == 0

    @computed_field
    @property
    def is_last(self) -> bool:
        return not self.has_next

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @computed_field
    @property
    def has_previous(self) -> bool:
        return self.number > 0

    def map(self, converter: Callable[[Any], Any]) -> "Page[Any]":
        """각 항목을 변환한 새 페이지를 반환합니다.

        Return a new page with ``converter`` applied to every item;
        paging metadata is unchanged.
        """
        return Page(
            content=[converter(item) for item in self.content],
            number=self.number,
            size=self.size,
            total_elements=self.total_elements,
        )


def count_query_for(query: Select[Any]) -> Select[Any]:
    """기본 카운트 쿼리 — 정렬을 제거한 서브쿼리에 COUNT(*) 실행.

    Derive a ``SELECT count(*)`` over ``query`` with ORDER BY stripped.
    """
    return select(func.count()).select_from(query.order_by(None).subquery())


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    pageable: PageRequest,
    count_query: Select[Any] | None = None,
) -> Page[Any]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute ``query`` for the window described by ``pageable`` and build a
    Page. The total comes from ``count_query`` when given, otherwise from a
    COUNT over ``query``. When the fetched window is already the last one
    the total is computed from the offset and the count query is skipped.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: 정렬까지 적용된 SELECT 쿼리 (Content query, sort already applied)
        pageable: 페이지 요청 (Page request)
        count_query: 별도 카운트 쿼리 (Independent count statement, optional)

    Returns:
        Page: 페이지 결과 (Page of scalar results)
    """
    result = await db.execute(query.offset(pageable.offset).limit(pageable.size))
    content: list[Any] = list(result.scalars().all())

    # 마지막 페이지면 카운트 쿼리 생략 — Skip the count on the last window
    if len(content) < pageable.size and (pageable.offset == 0 or content):
        total: int = pageable.offset + len(content)
    else:
        statement: Select[Any] = count_query if count_query is not None else count_query_for(query)
        total = (await db.execute(statement)).scalar() or 0

    return Page(content=content, number=pageable.page, size=pageable.size, total_elements=total)


async def fetch_slice(
    db: AsyncSession,
    query: Select[Any],
    pageable: PageRequest,
) -> Slice[Any]:
    """카운트 쿼리 없이 슬라이스를 조회합니다.

    Fetch ``size + 1`` rows to learn whether another window exists,
    then return the first ``size`` of them.
    """
    result = await db.execute(query.offset(pageable.offset).limit(pageable.size + 1))
    rows: list[Any] = list(result.scalars().all())
    return Slice(
        content=rows[: pageable.size],
        number=pageable.page,
        size=pageable.size,
        has_next=len(rows) > pageable.size,
    )
