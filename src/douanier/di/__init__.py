"""
Dependency Injection module for Douanier.

Provides container and dependency functions for FastAPI routes.
"""

from douanier.di.container import (
    DIContainer,
    get_container,
    initialize_container,
    reset_container,
    shutdown_container,
)
from douanier.di.dependencies import (
    get_apply_discount,
    get_balance_oracle,
    get_check_token_balance,
    get_create_discount_rule,
    get_create_verification_session,
    get_db_session,
    get_delete_discount_rule,
    get_get_discount_stats,
    get_get_token_info,
    get_list_discount_rules,
    get_signature_verifier,
    get_update_discount_rule,
    get_verify_wallet_signature,
)

__all__ = [
    # Container
    "DIContainer",
    "get_container",
    "initialize_container",
    "shutdown_container",
    "reset_container",
    # Dependencies
    "get_db_session",
    "get_balance_oracle",
    "get_signature_verifier",
    "get_create_verification_session",
    "get_verify_wallet_signature",
    "get_check_token_balance",
    "get_apply_discount",
    "get_list_discount_rules",
    "get_create_discount_rule",
    "get_update_discount_rule",
    "get_delete_discount_rule",
    "get_get_discount_stats",
    "get_get_token_info",
]
