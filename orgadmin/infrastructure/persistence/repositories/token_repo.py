"""Token repository. Revocation is soft delete; get_by_jti only sees live pairs."""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.infrastructure.persistence.models.token import Token
from orgadmin.infrastructure.persistence.models.user import User
from orgadmin.infrastructure.persistence.repositories.auditable_repo import (
    AuditableRepository,
)


class TokenRepository(AuditableRepository[Token]):
    """Issued token pairs."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Token)

    def _get_entity_type(self) -> str:
        return "token"

    async def get_by_jti(self, jti: str, *, include_deleted: bool = False) -> Token | None:
        result = await self.db.execute(
            self._select(include_deleted=include_deleted).where(Token.jti == jti)
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        user_id: int | None,
        skip: int = 0,
        limit: int | None = None,
        *,
        include_deleted: bool = False,
        organization_ids: Collection[int] | None = None,
    ) -> list[Token]:
        """Tokens ordered by id.

        user_id=None lists every user's tokens. organization_ids restricts
        the listing to tokens of users in those organizations.
        """
        q = self._select(include_deleted=include_deleted)
        if user_id is not None:
            q = q.where(Token.user_id == user_id)
        if organization_ids is not None:
            q = q.join(User, User.id == Token.user_id).where(
                User.organization_id.in_(set(organization_ids))
            )
        q = q.order_by(Token.id).offset(skip)
        if limit is not None:
            q = q.limit(limit)
        result = await self.db.execute(q)
        return list(result.scalars().all())
