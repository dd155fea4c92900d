"""
Eligibility evaluator.

Decides which of a shop's active rules a verified wallet can use right now.
"""

import asyncio
from datetime import datetime
from typing import Mapping, Optional, Sequence
from uuid import UUID

from douanier.application.dto.eligibility_dto import EligibleDiscount
from douanier.domain.clock import utcnow
from douanier.domain.entities.discount_rule import DiscountRule
from douanier.domain.exceptions import BlockchainError
from douanier.domain.services.i_balance_oracle import IBalanceOracle
from douanier.domain.value_objects.token_amount import format_units, to_raw_units
from douanier.infrastructure.monitoring import metrics
from douanier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class EligibilityEvaluator:
    """
    Evaluate rules against a wallet.

    A rule is eligible when:
    - now lies inside its validity window
    - its global usage limit, if any, is not exhausted
    - this wallet's redemptions stay below its per-customer limit, if any
    - the wallet's raw balance reaches the scaled minimum

    The first three checks need no network and run before any balance
    lookup. Lookups fan out concurrently, each bounded by a timeout; a
    failing or slow lookup drops only its own rule.
    """

    def __init__(self, balance_oracle: IBalanceOracle, call_timeout: float = 8.0):
        """
        Initialize evaluator.

        Args:
            balance_oracle: Multi-chain balance oracle
            call_timeout: Seconds allowed per balance lookup
        """
        self.balance_oracle = balance_oracle
        self.call_timeout = call_timeout

    async def evaluate(
        self,
        wallet_address: str,
        rules: Sequence[DiscountRule],
        customer_usage: Optional[Mapping[UUID, int]] = None,
        now: Optional[datetime] = None,
    ) -> list[EligibleDiscount]:
        """
        Return the eligible rules, in input order.

        Args:
            wallet_address: Verified wallet address
            rules: Active rules of the shop, in creation order
            customer_usage: Redemptions per rule ID for this wallet
            now: Evaluation time (defaults to current UTC time)

        Returns:
            Eligible discounts with formatted balance and requirement
        """
        moment = now or utcnow()
        usage = customer_usage or {}

        candidates = [
            rule
            for rule in rules
            if rule.is_within_window(moment)
            and rule.has_capacity()
            and rule.allows_customer(usage.get(rule.id, 0))
        ]
        if not candidates:
            return []

        results = await asyncio.gather(
            *(self._check_balance(rule, wallet_address) for rule in candidates)
        )

        return [result for result in results if result is not None]

    async def _check_balance(
        self, rule: DiscountRule, wallet_address: str
    ) -> Optional[EligibleDiscount]:
        """Look up one rule's balance; None if ineligible or lookup failed."""
        try:
            balance = await asyncio.wait_for(
                self.balance_oracle.get_balance(
                    rule.chain_id, rule.token_contract_address, wallet_address
                ),
                timeout=self.call_timeout,
            )
            required = to_raw_units(rule.min_token_amount, balance.decimals)
        except asyncio.TimeoutError:
            metrics.eligibility_rules_skipped_total.labels(reason="timeout").inc()
            logger.warning(
                f"Balance lookup timed out for rule {rule.id} "
                f"on chain {rule.chain_id}"
            )
            return None
        except BlockchainError as e:
            metrics.eligibility_rules_skipped_total.labels(reason=e.code).inc()
            logger.warning(f"Skipping rule {rule.id}: {e.code}: {e.message}")
            return None
        except ValueError as e:
            metrics.eligibility_rules_skipped_total.labels(reason="bad_decimals").inc()
            logger.warning(f"Skipping rule {rule.id}: {e}")
            return None
        except Exception as e:
            metrics.eligibility_rules_skipped_total.labels(reason="error").inc()
            logger.error(
                f"Unexpected error checking rule {rule.id}: {e}",
                exc_info=True,
            )
            return None

        if balance.raw < required:
            return None

        return EligibleDiscount(
            id=rule.id,
            name=rule.name,
            description=rule.description,
            discount_type=rule.discount_type.value,
            discount_value=rule.discount_value,
            max_discount_amount=rule.max_discount_amount,
            token_balance=format_units(balance.raw, balance.decimals),
            required_tokens=format_units(required, balance.decimals),
        )
