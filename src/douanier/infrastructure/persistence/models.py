"""
SQLAlchemy models for Douanier persistence.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    DECIMAL,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from douanier.domain.clock import utcnow


class Base(DeclarativeBase):
    """Base class for all models."""


class ShopModel(Base):
    """Shop database model - one row per installed store."""

    __tablename__ = "shops"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    shop_domain: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    installed_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # Relationships
    discount_rules: Mapped[list["DiscountRuleModel"]] = relationship(
        "DiscountRuleModel",
        back_populates="shop",
        lazy="select",
        cascade="all, delete-orphan",
    )
    verified_customers: Mapped[list["VerifiedCustomerModel"]] = relationship(
        "VerifiedCustomerModel",
        back_populates="shop",
        lazy="select",
        cascade="all, delete-orphan",
    )


class VerificationSessionModel(Base):
    """Verification session database model."""

    __tablename__ = "verification_sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    session_token: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    shop_domain: Mapped[str] = mapped_column(String(255), nullable=False)
    wallet_address: Mapped[str] = mapped_column(String(42), nullable=False)
    chain_id: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    nonce: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class DiscountRuleModel(Base):
    """Discount rule database model."""

    __tablename__ = "discount_rules"
    __table_args__ = (Index("ix_discount_rules_shop_active", "shop_id", "is_active"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    shop_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("shops.id"), index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    # Human units as text: 18-decimal amounts overflow DECIMAL(18, 6)
    min_token_amount: Mapped[str] = mapped_column(String(100), nullable=False)
    token_contract_address: Mapped[str] = mapped_column(String(42), nullable=False)
    chain_id: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    discount_type: Mapped[str] = mapped_column(String(20), nullable=False)
    discount_value: Mapped[Decimal] = mapped_column(
        DECIMAL(precision=18, scale=6), nullable=False
    )
    max_discount_amount: Mapped[Decimal | None] = mapped_column(
        DECIMAL(precision=18, scale=6)
    )
    usage_limit: Mapped[int | None] = mapped_column(Integer)
    per_customer_limit: Mapped[int | None] = mapped_column(Integer)
    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    starts_at: Mapped[datetime | None] = mapped_column(DateTime)
    ends_at: Mapped[datetime | None] = mapped_column(DateTime)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow
    )

    # Relationships
    shop: Mapped["ShopModel"] = relationship(
        "ShopModel", back_populates="discount_rules", lazy="select"
    )
    usages: Mapped[list["CustomerDiscountUsageModel"]] = relationship(
        "CustomerDiscountUsageModel",
        back_populates="discount_rule",
        lazy="select",
        cascade="all, delete-orphan",
    )


class VerifiedCustomerModel(Base):
    """Verified customer database model - unique per (shop, wallet)."""

    __tablename__ = "verified_customers"
    __table_args__ = (
        UniqueConstraint("shop_id", "wallet_address", name="uq_customer_shop_wallet"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    shop_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("shops.id"), index=True, nullable=False
    )
    wallet_address: Mapped[str] = mapped_column(String(42), nullable=False)
    chain_id: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    last_verified_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # Relationships
    shop: Mapped["ShopModel"] = relationship(
        "ShopModel", back_populates="verified_customers", lazy="select"
    )
    usages: Mapped[list["CustomerDiscountUsageModel"]] = relationship(
        "CustomerDiscountUsageModel",
        back_populates="customer",
        lazy="select",
        cascade="all, delete-orphan",
    )


class CustomerDiscountUsageModel(Base):
    """Redemption record database model."""

    __tablename__ = "customer_discount_usage"
    __table_args__ = (
        Index("ix_usage_rule_customer", "discount_rule_id", "customer_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    discount_rule_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("discount_rules.id", ondelete="CASCADE"), nullable=False
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("verified_customers.id"), index=True, nullable=False
    )
    discount_code: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    discount_amount: Mapped[Decimal] = mapped_column(
        DECIMAL(precision=18, scale=6), nullable=False, default=Decimal("0")
    )
    used_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # Relationships
    discount_rule: Mapped["DiscountRuleModel"] = relationship(
        "DiscountRuleModel", back_populates="usages", lazy="select"
    )
    customer: Mapped["VerifiedCustomerModel"] = relationship(
        "VerifiedCustomerModel", back_populates="usages", lazy="select"
    )
