"""
Discount rule management use cases.

Merchant-side CRUD, always scoped to the merchant's own shop.
"""

from uuid import UUID

from douanier.application.dto.discount_rule_dto import (
    CreateDiscountRuleCommand,
    DiscountRulePatch,
)
from douanier.application.use_cases.guards import require_shop
from douanier.domain.entities.discount_rule import DiscountRule
from douanier.domain.exceptions import EntityNotFoundError, ValidationError
from douanier.domain.repositories.i_discount_rule_repository import (
    IDiscountRuleRepository,
)
from douanier.domain.repositories.i_shop_repository import IShopRepository


class ListDiscountRules:
    """List a shop's rules, newest first."""

    def __init__(
        self,
        shop_repository: IShopRepository,
        rule_repository: IDiscountRuleRepository,
    ):
        self.shop_repository = shop_repository
        self.rule_repository = rule_repository

    async def execute(self, shop_domain: str) -> list[DiscountRule]:
        """
        Execute listing.

        Raises:
            EntityNotFoundError: If shop not found
        """
        shop = await require_shop(self.shop_repository, shop_domain)
        return await self.rule_repository.list_by_shop(shop.id)


class CreateDiscountRule:
    """
    Create a discount rule.

    Business rules:
    - name, minimum token amount, token contract, discount type and
      discount value are required
    - Percentage discounts lie within 0..100
    - Token contract address is stored lower-case
    """

    def __init__(
        self,
        shop_repository: IShopRepository,
        rule_repository: IDiscountRuleRepository,
    ):
        """
        Initialize use case with dependencies.

        Args:
            shop_repository: Repository for shops
            rule_repository: Repository for discount rules
        """
        self.shop_repository = shop_repository
        self.rule_repository = rule_repository

    async def execute(
        self, shop_domain: str, command: CreateDiscountRuleCommand
    ) -> DiscountRule:
        """
        Execute rule creation.

        Args:
            shop_domain: Merchant's shop
            command: Rule fields

        Returns:
            Created DiscountRule

        Raises:
            EntityNotFoundError: If shop not found
            ValidationError: If rule fields are invalid
        """
        shop = await require_shop(self.shop_repository, shop_domain)

        try:
            rule = DiscountRule(
                shop_id=shop.id,
                name=command.name,
                description=command.description,
                min_token_amount=command.min_token_amount,
                token_contract_address=command.token_contract_address,
                chain_id=command.chain_id,
                discount_type=command.discount_type,
                discount_value=command.discount_value,
                max_discount_amount=command.max_discount_amount,
                usage_limit=command.usage_limit,
                per_customer_limit=command.per_customer_limit,
                starts_at=command.starts_at,
                ends_at=command.ends_at,
                is_active=command.is_active,
            )
        except ValueError as e:
            raise ValidationError(field="discountRule", reason=str(e))

        return await self.rule_repository.create(rule)


class UpdateDiscountRule:
    """
    Apply a partial update to a rule.

    Only fields of DiscountRulePatch can change; token contract, chain
    and usage counter are fixed after creation.
    """

    def __init__(
        self,
        shop_repository: IShopRepository,
        rule_repository: IDiscountRuleRepository,
    ):
        self.shop_repository = shop_repository
        self.rule_repository = rule_repository

    async def execute(
        self, shop_domain: str, rule_id: UUID, patch: DiscountRulePatch
    ) -> DiscountRule:
        """
        Execute rule update.

        Args:
            shop_domain: Merchant's shop
            rule_id: Rule to update
            patch: Fields to change

        Returns:
            Updated DiscountRule

        Raises:
            EntityNotFoundError: If shop or rule not found
            ValidationError: If the patch is empty or leaves the rule invalid
        """
        shop = await require_shop(self.shop_repository, shop_domain)

        rule = await self.rule_repository.get_by_id(rule_id, shop.id)
        if not rule:
            raise EntityNotFoundError(
                entity_type="DiscountRule", entity_id=str(rule_id)
            )

        changes = patch.changes()
        if not changes:
            raise ValidationError(field="body", reason="No fields to update")

        try:
            rule.apply_changes(changes)
        except ValueError as e:
            raise ValidationError(field="discountRule", reason=str(e))

        return await self.rule_repository.update(rule)


class DeleteDiscountRule:
    """Delete a rule and its redemption records."""

    def __init__(
        self,
        shop_repository: IShopRepository,
        rule_repository: IDiscountRuleRepository,
    ):
        self.shop_repository = shop_repository
        self.rule_repository = rule_repository

    async def execute(self, shop_domain: str, rule_id: UUID) -> None:
        """
        Execute rule deletion.

        Raises:
            EntityNotFoundError: If shop or rule not found
        """
        shop = await require_shop(self.shop_repository, shop_domain)

        deleted = await self.rule_repository.delete(rule_id, shop.id)
        if not deleted:
            raise EntityNotFoundError(
                entity_type="DiscountRule", entity_id=str(rule_id)
            )
