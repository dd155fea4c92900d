"""
Douanier - token-gated discounts verified by wallet signature.
"""

__version__ = "0.1.0"
