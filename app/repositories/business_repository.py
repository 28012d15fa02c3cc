"""사업장 레포지토리 — 사업장 CRUD 쿼리.

Business Repository — CRUD queries for businesses.
"""

from app.models.business import Business
from app.repositories.base import BaseRepository


class BusinessRepository(BaseRepository[Business]):
    """사업장 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the businesses table.
    """

    def __init__(self) -> None:
        super().__init__(Business)


# 싱글턴 인스턴스 — Singleton instance
business_repository: BusinessRepository = BusinessRepository()
