"""
Integration tests for VerificationSessionRepository and ShopRepository.

Usage:
    pytest tests/integration/database/test_session_repository.py
"""

import asyncio

import pytest

from douanier.domain.entities.shop import Shop
from douanier.domain.entities.verification_session import (
    SessionStatus,
    VerificationSession,
)
from douanier.infrastructure.persistence.database import Database
from douanier.infrastructure.persistence.repositories import (
    ShopRepository,
    VerificationSessionRepository,
)
from tests.helpers.wallets import ALICE

pytestmark = pytest.mark.integration


class TestShopRepository:
    """Tests for shop lookup."""

    async def test_get_by_domain_is_case_insensitive(self, test_db, shop):
        async with test_db.session() as session:
            found = await ShopRepository(session).get_by_domain(
                shop.shop_domain.upper()
            )

        assert found is not None
        assert found.id == shop.id

    async def test_inactive_shop_is_hidden(self, test_db):
        async with test_db.session() as session:
            await ShopRepository(session).create(
                Shop(shop_domain="closed.myshopify.com", is_active=False)
            )

        async with test_db.session() as session:
            found = await ShopRepository(session).get_by_domain(
                "closed.myshopify.com"
            )

        assert found is None


class TestVerificationSessionRepository:
    """Tests for session persistence and transitions."""

    async def _store(self, db: Database) -> VerificationSession:
        async with db.session() as session:
            return await VerificationSessionRepository(session).create(
                VerificationSession.issue("store.myshopify.com", ALICE.address)
            )

    async def test_create_and_get(self, test_db):
        stored = await self._store(test_db)

        async with test_db.session() as session:
            loaded = await VerificationSessionRepository(session).get_by_token(
                stored.session_token
            )

        assert loaded is not None
        assert loaded.status == SessionStatus.PENDING
        assert loaded.nonce == stored.nonce
        assert loaded.wallet_address == ALICE.address.lower()
        assert loaded.expires_at == stored.expires_at

    async def test_unknown_token(self, test_db):
        async with test_db.session() as session:
            repository = VerificationSessionRepository(session)
            assert await repository.get_by_token("x") is None

    async def test_transition_happens_once(self, test_db):
        stored = await self._store(test_db)

        async with test_db.session() as session:
            repository = VerificationSessionRepository(session)
            assert await repository.transition_from_pending(
                stored.session_token, SessionStatus.VERIFIED
            )
            assert not await repository.transition_from_pending(
                stored.session_token, SessionStatus.FAILED
            )

        async with test_db.session() as session:
            loaded = await VerificationSessionRepository(session).get_by_token(
                stored.session_token
            )

        assert loaded.status == SessionStatus.VERIFIED

    async def test_concurrent_transitions(self, test_db):
        stored = await self._store(test_db)

        async def attempt(status: SessionStatus) -> bool:
            async with test_db.session() as session:
                return await VerificationSessionRepository(
                    session
                ).transition_from_pending(stored.session_token, status)

        outcomes = await asyncio.gather(
            *(attempt(SessionStatus.VERIFIED) for _ in range(5)),
            *(attempt(SessionStatus.FAILED) for _ in range(5)),
        )

        assert outcomes.count(True) == 1
