"""
Application use cases.
"""

from douanier.application.use_cases.apply_discount import (
    ApplyDiscount,
    ApplyDiscountResult,
)
from douanier.application.use_cases.check_token_balance import (
    CheckTokenBalance,
    CheckTokenBalanceResult,
)
from douanier.application.use_cases.create_verification_session import (
    CreateVerificationSession,
    CreateVerificationSessionResult,
)
from douanier.application.use_cases.get_discount_stats import GetDiscountStats
from douanier.application.use_cases.get_shop_info import GetShopInfo
from douanier.application.use_cases.get_token_info import GetTokenInfo
from douanier.application.use_cases.manage_discount_rules import (
    CreateDiscountRule,
    DeleteDiscountRule,
    ListDiscountRules,
    UpdateDiscountRule,
)
from douanier.application.use_cases.verify_wallet_signature import (
    VerifyWalletSignature,
    VerifyWalletSignatureResult,
)

__all__ = [
    "CreateVerificationSession",
    "CreateVerificationSessionResult",
    "VerifyWalletSignature",
    "VerifyWalletSignatureResult",
    "CheckTokenBalance",
    "CheckTokenBalanceResult",
    "ApplyDiscount",
    "ApplyDiscountResult",
    "ListDiscountRules",
    "CreateDiscountRule",
    "UpdateDiscountRule",
    "DeleteDiscountRule",
    "GetDiscountStats",
    "GetTokenInfo",
    "GetShopInfo",
]
