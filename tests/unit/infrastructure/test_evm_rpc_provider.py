"""
Unit tests for EVMRPCProvider.

The HTTP session is replaced with an in-memory stand-in; no network
traffic leaves the test.

Usage:
    pytest tests/unit/infrastructure/test_evm_rpc_provider.py
"""

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import aiohttp
import pytest
from eth_abi import encode

from douanier.domain.exceptions.blockchain import RemoteUnavailableError
from douanier.infrastructure.blockchain import erc20
from douanier.infrastructure.blockchain.evm_rpc_provider import EVMRPCProvider

CONTRACT = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
WALLET = "0x90f8bf6a479f320ead074411a4b0e7944ea8c9c1"


def hex_result(types: list[str], values: list[Any]) -> str:
    return "0x" + encode(types, values).hex()


class FakeResponse:
    """Minimal aiohttp response."""

    def __init__(self, status: int = 200, payload: Any = None, error=None):
        self.status = status
        self.payload = payload
        self.error = error

    async def __aenter__(self):
        if self.error:
            raise self.error
        return self

    async def __aexit__(self, *exc):
        return False

    async def json(self, content_type=None):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """Minimal aiohttp session answering eth_call by selector."""

    def __init__(self, responses: dict[str, FakeResponse]):
        self.responses = responses
        self.requests: list[dict] = []
        self.closed = False

    def post(self, url: str, json: dict) -> FakeResponse:
        self.requests.append(json)
        data = json["params"][0]["data"]
        return self.responses[data[:10]]

    async def close(self):
        self.closed = True


def rpc_ok(result: str) -> FakeResponse:
    return FakeResponse(payload={"jsonrpc": "2.0", "id": 1, "result": result})


@pytest.fixture
def provider() -> EVMRPCProvider:
    return EVMRPCProvider(chain_id=1, rpc_url="http://rpc.test")


def attach(provider: EVMRPCProvider, session: FakeSession) -> None:
    provider._get_session = AsyncMock(return_value=session)


class TestGetBalance:
    """Tests for balance lookups."""

    async def test_balance_and_decimals(self, provider):
        session = FakeSession(
            {
                "0x70a08231": rpc_ok(hex_result(["uint256"], [2000 * 10**18])),
                "0x313ce567": rpc_ok(hex_result(["uint8"], [18])),
            }
        )
        attach(provider, session)

        balance = await provider.get_balance(CONTRACT, WALLET)

        assert balance.raw == 2000 * 10**18
        assert balance.decimals == 18
        assert len(session.requests) == 2
        call = session.requests[0]
        assert call["method"] == "eth_call"
        assert call["params"][0]["to"] == CONTRACT
        assert call["params"][1] == "latest"

    async def test_request_ids_are_unique(self, provider):
        session = FakeSession(
            {
                "0x70a08231": rpc_ok(hex_result(["uint256"], [1])),
                "0x313ce567": rpc_ok(hex_result(["uint8"], [6])),
            }
        )
        attach(provider, session)

        await provider.get_balance(CONTRACT, WALLET)

        ids = [request["id"] for request in session.requests]
        assert len(set(ids)) == len(ids)

    async def test_rpc_error(self, provider):
        error = FakeResponse(
            payload={
                "jsonrpc": "2.0",
                "id": 1,
                "error": {"code": -32000, "message": "boom"},
            }
        )
        attach(
            provider,
            FakeSession(
                {"0x70a08231": error, "0x313ce567": rpc_ok(hex_result(["uint8"], [18]))}
            ),
        )

        with pytest.raises(RemoteUnavailableError, match="boom"):
            await provider.get_balance(CONTRACT, WALLET)

    async def test_http_error_status(self, provider):
        attach(
            provider,
            FakeSession(
                {
                    "0x70a08231": FakeResponse(status=503),
                    "0x313ce567": rpc_ok(hex_result(["uint8"], [18])),
                }
            ),
        )

        with pytest.raises(RemoteUnavailableError, match="HTTP 503"):
            await provider.get_balance(CONTRACT, WALLET)

    async def test_transport_error(self, provider):
        attach(
            provider,
            FakeSession(
                {
                    "0x70a08231": FakeResponse(
                        error=aiohttp.ClientConnectionError("refused")
                    ),
                    "0x313ce567": rpc_ok(hex_result(["uint8"], [18])),
                }
            ),
        )

        with pytest.raises(RemoteUnavailableError):
            await provider.get_balance(CONTRACT, WALLET)

    async def test_timeout(self, provider):
        attach(
            provider,
            FakeSession(
                {
                    "0x70a08231": FakeResponse(error=asyncio.TimeoutError()),
                    "0x313ce567": rpc_ok(hex_result(["uint8"], [18])),
                }
            ),
        )

        with pytest.raises(RemoteUnavailableError):
            await provider.get_balance(CONTRACT, WALLET)

    async def test_invalid_json(self, provider):
        attach(
            provider,
            FakeSession(
                {
                    "0x70a08231": FakeResponse(payload=ValueError("not json")),
                    "0x313ce567": rpc_ok(hex_result(["uint8"], [18])),
                }
            ),
        )

        with pytest.raises(RemoteUnavailableError):
            await provider.get_balance(CONTRACT, WALLET)

    async def test_missing_result(self, provider):
        attach(
            provider,
            FakeSession(
                {
                    "0x70a08231": FakeResponse(payload={"jsonrpc": "2.0", "id": 1}),
                    "0x313ce567": rpc_ok(hex_result(["uint8"], [18])),
                }
            ),
        )

        with pytest.raises(RemoteUnavailableError, match="Malformed"):
            await provider.get_balance(CONTRACT, WALLET)

    async def test_empty_return_data(self, provider):
        # Calling a non-contract address returns "0x"
        attach(
            provider,
            FakeSession(
                {
                    "0x70a08231": rpc_ok("0x"),
                    "0x313ce567": rpc_ok("0x"),
                }
            ),
        )

        with pytest.raises(RemoteUnavailableError, match="Malformed"):
            await provider.get_balance(CONTRACT, WALLET)


class TestGetTokenInfo:
    """Tests for token metadata lookups."""

    async def test_token_info(self, provider):
        attach(
            provider,
            FakeSession(
                {
                    "0x06fdde03": rpc_ok(hex_result(["string"], ["USD Coin"])),
                    "0x95d89b41": rpc_ok(hex_result(["string"], ["USDC"])),
                    "0x313ce567": rpc_ok(hex_result(["uint8"], [6])),
                }
            ),
        )

        info = await provider.get_token_info(CONTRACT)

        assert info.address == CONTRACT
        assert info.chain_id == 1
        assert info.name == "USD Coin"
        assert info.symbol == "USDC"
        assert info.decimals == 6


class TestClose:
    """Tests for session lifecycle."""

    async def test_close_without_session(self, provider):
        await provider.close()

    async def test_close_session(self, provider):
        session = AsyncMock()
        session.closed = False
        provider._session = session

        await provider.close()

        session.close.assert_awaited_once()
        assert provider._session is None
