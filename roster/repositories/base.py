"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Provides generic save/find/count/delete operations plus the shared
single-result and native-SQL helpers. Writes flush but never commit;
the caller owns the transaction.

Usage:
    class TeamRepository(BaseRepository[Team]):
        def __init__(self) -> None:
            super().__init__(Team)
"""

from typing import Any, Generic, Iterable, TypeVar

from sqlalchemy import Result, Select, TextClause, func, select, text
from sqlalchemy.exc import MultipleResultsFound
from sqlalchemy.ext.asyncio import AsyncSession

from roster.database import Base
from roster.utils.exceptions import NonUniqueResultError
from roster.utils.pagination import Page, PageRequest, Sort, paginate

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def save(self, db: AsyncSession, entity: ModelType) -> ModelType:
        """엔티티를 저장합니다.

        Add ``entity`` to the session and flush so its id and timestamps
        are populated.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            entity: 저장할 엔티티 (Entity to persist)

        Returns:
            ModelType: 저장된 엔티티 (The same, now persistent, entity)
        """
        db.add(entity)
        await db.flush()
        return entity

    async def save_all(self, db: AsyncSession, entities: Iterable[ModelType]) -> list[ModelType]:
        """여러 엔티티를 한 번의 flush로 저장합니다 (Persist several entities with one flush)."""
        saved: list[ModelType] = list(entities)
        db.add_all(saved)
        await db.flush()
        return saved

    async def find_by_id(self, db: AsyncSession, record_id: int) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a record by primary key, consulting the session identity
        map before hitting the database.

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        return await db.get(self.model, record_id)

    async def find_all(self, db: AsyncSession, sort: Sort | None = None) -> list[ModelType]:
        """모든 레코드를 조회합니다 (Retrieve every record, optionally sorted)."""
        query: Select = select(self.model)
        if sort is not None:
            query = sort.apply(query, self.model)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_all_paged(self, db: AsyncSession, pageable: PageRequest) -> Page[Any]:
        """모든 레코드를 페이지 단위로 조회합니다 (Retrieve one page of all records)."""
        query: Select = pageable.sort.apply(select(self.model), self.model)
        return await paginate(db, query, pageable)

    async def count(self, db: AsyncSession) -> int:
        """전체 레코드 수를 반환합니다 (Total number of records)."""
        query: Select = select(func.count()).select_from(self.model)
        return (await db.execute(query)).scalar() or 0

    async def exists_by_id(self, db: AsyncSession, record_id: int) -> bool:
        """ID에 해당하는 레코드 존재 여부를 확인합니다 (Whether a record with this id exists)."""
        return await self.find_by_id(db, record_id) is not None

    async def delete(self, db: AsyncSession, entity: ModelType) -> None:
        """엔티티를 삭제합니다 (Delete a loaded entity)."""
        await db.delete(entity)
        await db.flush()

    async def delete_by_id(self, db: AsyncSession, record_id: int) -> bool:
        """ID로 레코드를 삭제합니다.

        Delete a record by primary key.

        Returns:
            bool: 삭제 성공 여부 (False when no such record exists)
        """
        entity: ModelType | None = await self.find_by_id(db, record_id)
        if entity is None:
            return False
        await self.delete(db, entity)
        return True

    async def delete_all(self, db: AsyncSession) -> int:
        """모든 레코드를 하나씩 로드하여 삭제합니다.

        Load and delete every record through the session, so ORM cascades
        and identity-map bookkeeping apply.

        Returns:
            int: 삭제된 레코드 수 (Number of deleted records)
        """
        entities: list[ModelType] = await self.find_all(db)
        for entity in entities:
            await db.delete(entity)
        await db.flush()
        return len(entities)

    @staticmethod
    def single_result(result: Result[Any]) -> Any | None:
        """단건 결과를 반환합니다.

        Return the only row's first column, or None when there are no rows.

        Raises:
            NonUniqueResultError: 결과가 2건 이상일 때 (More than one row matched)
        """
        try:
            return result.scalar_one_or_none()
        except MultipleResultsFound as exc:
            raise NonUniqueResultError("Query did not return a unique result: more than one row matched") from exc

    @staticmethod
    def native_query(sql: str, *params: Any) -> TextClause:
        """위치 기반(?) 파라미터를 가진 네이티브 SQL을 바인딩합니다.

        Bind the positional ``?`` markers of ``sql`` to ``params`` in order.
        The stored SQL string is left as written; markers become named
        binds so the statement runs on any driver's parameter style.

        Raises:
            ValueError: 마커 수와 파라미터 수가 다를 때 (Marker/parameter count mismatch)
        """
        parts: list[str] = sql.split("?")
        if len(parts) - 1 != len(params):
            raise ValueError(f"Expected {len(parts) - 1} parameters, got {len(params)}")

        rendered: str = parts[0]
        for index, part in enumerate(parts[1:], start=1):
            rendered += f":p{index}{part}"
        return text(rendered).bindparams(**{f"p{i}": value for i, value in enumerate(params, start=1)})
