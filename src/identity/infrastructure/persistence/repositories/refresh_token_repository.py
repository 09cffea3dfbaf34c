"""
RefreshToken Repository Implementation
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.database.sqlalchemy_repository import SQLAlchemyRepository
from identity.domain.entities.refresh_token import RefreshToken
from identity.infrastructure.persistence.models.refresh_token_model import RefreshTokenModel


class RefreshTokenRepository(SQLAlchemyRepository[RefreshToken, RefreshTokenModel]):
    """
    RefreshToken repository implementation.

    Revocations are single UPDATE statements so a concurrent rotation sees
    either none or all of them.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session,
            model_class=RefreshTokenModel,
            entity_class=RefreshToken,
        )

    def _to_entity(self, model: RefreshTokenModel) -> RefreshToken:
        """Convert ORM model to domain entity"""
        return RefreshToken(
            id=model.id,
            identity_id=model.identity_id,
            token_hash=model.token_hash,
            expires_at=model.expires_at,
            revoked=model.revoked,
            revoked_at=model.revoked_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: RefreshToken) -> RefreshTokenModel:
        """Convert domain entity to ORM model"""
        return RefreshTokenModel(
            id=entity.id,
            identity_id=entity.identity_id,
            token_hash=entity.token_hash,
            expires_at=entity.expires_at,
            revoked=entity.revoked,
            revoked_at=entity.revoked_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_hash(self, token_hash: str) -> Optional[RefreshToken]:
        """
        Get token by hash.

        Args:
            token_hash: SHA-256 hash of token

        Returns:
            RefreshToken if found, None otherwise
        """
        stmt = select(RefreshTokenModel).where(RefreshTokenModel.token_hash == token_hash)

        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def revoke_by_hash(self, token_hash: str, now: datetime) -> int:
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.token_hash == token_hash,
                RefreshTokenModel.revoked.is_(False),
            )
            .values(revoked=True, revoked_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def revoke_all_for_identity(self, identity_id: UUID, now: datetime) -> int:
        """
        Revoke all tokens for an identity (logout all devices).

        Args:
            identity_id: Identity UUID
            now: Revocation timestamp

        Returns:
            Number of tokens revoked
        """
        return await self.revoke_all_for_identities([identity_id], now)

    async def revoke_all_for_identities(self, identity_ids: Sequence[UUID], now: datetime) -> int:
        if not identity_ids:
            return 0
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.identity_id.in_(list(identity_ids)),
                RefreshTokenModel.revoked.is_(False),
            )
            .values(revoked=True, revoked_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def purge(self, now: datetime) -> int:
        """
        Delete expired or revoked tokens (cleanup job).

        Returns:
            Number of tokens deleted
        """
        stmt = (
            delete(RefreshTokenModel)
            .where(or_(RefreshTokenModel.expires_at < now, RefreshTokenModel.revoked.is_(True)))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
