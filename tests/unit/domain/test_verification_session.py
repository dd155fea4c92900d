"""
Unit tests for VerificationSession entity.

Usage:
    pytest tests/unit/domain/test_verification_session.py
"""

from datetime import datetime, timedelta

import pytest

from douanier.domain.entities.verification_session import (
    SessionStatus,
    VerificationSession,
)

WALLET = "0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1"
NOW = datetime(2026, 3, 1, 12, 0, 0)


def issue(**overrides) -> VerificationSession:
    params = {
        "shop_domain": "Store.MyShopify.com",
        "wallet_address": WALLET,
        "now": NOW,
    }
    params.update(overrides)
    return VerificationSession.issue(**params)


class TestVerificationSession:
    """Tests for VerificationSession."""

    def test_issue_creates_pending_session(self):
        session = issue()

        assert session.status == SessionStatus.PENDING
        assert session.is_pending()
        assert session.shop_domain == "store.myshopify.com"
        assert session.wallet_address == WALLET.lower()
        assert session.chain_id == 1
        assert session.expires_at == NOW + timedelta(minutes=15)

    def test_tokens_and_nonces_are_random(self):
        first, second = issue(), issue()

        assert len(first.session_token) == 64
        assert len(first.nonce) == 32
        assert first.session_token != second.session_token
        assert first.nonce != second.nonce

    def test_rejects_invalid_wallet(self):
        with pytest.raises(ValueError):
            issue(wallet_address="0xnotanaddress")

    def test_rejects_invalid_chain(self):
        with pytest.raises(ValueError, match="chain"):
            issue(chain_id=0)

    def test_expiry_is_lazy(self):
        session = issue(ttl=timedelta(minutes=15))

        assert not session.is_expired(NOW + timedelta(minutes=15))
        assert session.is_expired(NOW + timedelta(minutes=15, seconds=1))
        # Expiry never rewrites the status by itself
        assert session.status == SessionStatus.PENDING

    @pytest.mark.parametrize(
        "status",
        [SessionStatus.VERIFIED, SessionStatus.FAILED, SessionStatus.EXPIRED],
    )
    def test_transition_once(self, status):
        session = issue()
        session.transition(status)

        assert session.status == status
        with pytest.raises(ValueError, match="Cannot transition"):
            session.transition(SessionStatus.VERIFIED)

    def test_transition_to_pending_rejected(self):
        with pytest.raises(ValueError, match="terminal"):
            issue().transition(SessionStatus.PENDING)

    def test_is_bound_to(self):
        session = issue()

        assert session.is_bound_to("store.myshopify.com", WALLET)
        assert session.is_bound_to(" STORE.myshopify.com ", WALLET.lower())
        assert not session.is_bound_to("other.myshopify.com", WALLET)
        assert not session.is_bound_to(
            "store.myshopify.com", "0x0000000000000000000000000000000000000001"
        )
