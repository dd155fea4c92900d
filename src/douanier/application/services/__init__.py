"""Application services."""

from douanier.application.services.eligibility_evaluator import (
    EligibilityEvaluator,
)

__all__ = ["EligibilityEvaluator"]
