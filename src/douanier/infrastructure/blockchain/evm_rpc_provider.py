"""
EVM JSON-RPC chain provider.

Queries ERC-20 contracts through `eth_call` against one network's RPC
endpoint.
"""

import asyncio
import time
from itertools import count
from typing import Any, Optional

import aiohttp

from douanier.domain.exceptions.blockchain import RemoteUnavailableError
from douanier.domain.services.i_balance_oracle import (
    IChainProvider,
    TokenBalance,
    TokenInfo,
)
from douanier.infrastructure.blockchain import erc20
from douanier.infrastructure.monitoring import metrics
from douanier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class EVMRPCProvider(IChainProvider):
    """
    JSON-RPC client for one EVM chain.

    Read-only: only `eth_call` against the latest block. No retries;
    every failure surfaces as RemoteUnavailableError.
    """

    def __init__(
        self,
        chain_id: int,
        rpc_url: str,
        total_timeout: float = 10,
        connect_timeout: float = 3,
    ):
        """
        Initialize provider.

        Args:
            chain_id: EVM chain id served by the endpoint
            rpc_url: JSON-RPC endpoint URL
            total_timeout: Total request timeout in seconds (default: 10s)
            connect_timeout: Connection timeout in seconds (default: 3s)
        """
        self.chain_id = chain_id
        self.rpc_url = rpc_url
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout,
            connect=connect_timeout,
        )
        self._session: Optional[aiohttp.ClientSession] = None
        self._ids = count(1)

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=aiohttp.TCPConnector(
                    limit=100,
                    limit_per_host=30,
                    ttl_dns_cache=300,
                ),
            )
        return self._session

    async def get_balance(self, token_contract: str, wallet: str) -> TokenBalance:
        """
        Fetch balance and decimals concurrently.

        Args:
            token_contract: Lower-case token contract address
            wallet: Lower-case holder address

        Returns:
            TokenBalance

        Raises:
            RemoteUnavailableError: If either call fails
        """
        raw_balance, raw_decimals = await asyncio.gather(
            self._eth_call(
                token_contract, erc20.encode_balance_of(wallet), "balanceOf"
            ),
            self._eth_call(
                token_contract, erc20.encode_no_args(erc20.DECIMALS), "decimals"
            ),
        )

        try:
            balance = erc20.decode_uint(raw_balance)
            decimals = erc20.decode_uint(raw_decimals, bits=8)
        except ValueError as e:
            raise self._malformed("balanceOf", e)

        return TokenBalance(raw=balance, decimals=decimals)

    async def get_token_info(self, token_contract: str) -> TokenInfo:
        """
        Fetch name, symbol and decimals concurrently.

        Args:
            token_contract: Lower-case token contract address

        Returns:
            TokenInfo

        Raises:
            RemoteUnavailableError: If any call fails
        """
        raw_name, raw_symbol, raw_decimals = await asyncio.gather(
            self._eth_call(token_contract, erc20.encode_no_args(erc20.NAME), "name"),
            self._eth_call(
                token_contract, erc20.encode_no_args(erc20.SYMBOL), "symbol"
            ),
            self._eth_call(
                token_contract, erc20.encode_no_args(erc20.DECIMALS), "decimals"
            ),
        )

        try:
            return TokenInfo(
                address=token_contract,
                chain_id=self.chain_id,
                name=erc20.decode_text(raw_name),
                symbol=erc20.decode_text(raw_symbol),
                decimals=erc20.decode_uint(raw_decimals, bits=8),
            )
        except ValueError as e:
            raise self._malformed("tokenInfo", e)

    async def _eth_call(self, to: str, data: str, operation: str) -> bytes:
        """
        Execute `eth_call` against the latest block.

        Returns:
            Raw return data

        Raises:
            RemoteUnavailableError: On transport, RPC or format errors
        """
        result = await self._rpc_call(
            "eth_call",
            [{"to": to, "data": data}, "latest"],
            operation,
        )
        try:
            return erc20.hex_to_bytes(result)
        except ValueError as e:
            raise self._malformed(operation, e)

    async def _rpc_call(
        self, method: str, params: list[Any], operation: str
    ) -> Any:
        """
        Send one JSON-RPC request.

        Args:
            method: JSON-RPC method
            params: Method parameters
            operation: Label for metrics and logs

        Returns:
            The `result` member of the response

        Raises:
            RemoteUnavailableError: On transport errors, timeouts, RPC
                errors or responses without a result
        """
        chain = str(self.chain_id)
        metrics.chain_rpc_requests_total.labels(
            chain_id=chain, operation=operation
        ).inc()

        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

        start_time = time.time()
        try:
            session = await self._get_session()
            async with session.post(self.rpc_url, json=payload) as response:
                if response.status >= 400:
                    raise RemoteUnavailableError(
                        f"RPC endpoint returned HTTP {response.status}",
                        chain_id=self.chain_id,
                    )
                data = await response.json(content_type=None)

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            metrics.chain_rpc_errors_total.labels(
                chain_id=chain, error_type=type(e).__name__
            ).inc()
            logger.warning(
                f"RPC {operation} failed on chain {self.chain_id}: "
                f"{type(e).__name__}: {e}"
            )
            raise RemoteUnavailableError(
                f"RPC request failed on chain {self.chain_id}",
                chain_id=self.chain_id,
            )
        except RemoteUnavailableError:
            metrics.chain_rpc_errors_total.labels(
                chain_id=chain, error_type="http_status"
            ).inc()
            raise
        finally:
            metrics.chain_rpc_duration_seconds.labels(
                chain_id=chain, operation=operation
            ).observe(time.time() - start_time)

        if not isinstance(data, dict):
            raise self._malformed(operation, ValueError("response is not an object"))

        if data.get("error"):
            metrics.chain_rpc_errors_total.labels(
                chain_id=chain, error_type="rpc_error"
            ).inc()
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else error
            raise RemoteUnavailableError(
                f"RPC error on chain {self.chain_id}: {message}",
                chain_id=self.chain_id,
            )

        if "result" not in data:
            raise self._malformed(operation, ValueError("missing result"))

        return data["result"]

    def _malformed(self, operation: str, error: Exception) -> RemoteUnavailableError:
        metrics.chain_rpc_errors_total.labels(
            chain_id=str(self.chain_id), error_type="malformed_response"
        ).inc()
        logger.warning(
            f"Malformed {operation} response on chain {self.chain_id}: {error}"
        )
        return RemoteUnavailableError(
            f"Malformed RPC response on chain {self.chain_id}",
            chain_id=self.chain_id,
        )

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
