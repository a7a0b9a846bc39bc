"""SQLAlchemy ORM models for Order aggregate."""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import Base

# Collision detection in the repository matches on this name.
ORDER_CODE_CONSTRAINT = "uq_orders_order_code"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderModel(Base):
    """SQLAlchemy ORM model for orders table."""

    __tablename__ = "orders"
    __table_args__ = (UniqueConstraint("order_code", name=ORDER_CODE_CONSTRAINT),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_code = Column(String(8), nullable=False)

    customer_id = Column(String(64), nullable=False, index=True)
    customer_name = Column(String(255), nullable=True)

    total_amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="PKR")
    status = Column(String(20), nullable=False, default="pending", index=True)

    shipping_address = Column(Text, nullable=False)
    phone = Column(String(32), nullable=False)
    payment_method = Column(String(20), nullable=False, default="fastpay")

    # Shipment
    tracking_number = Column(String(100), nullable=True)
    courier_name = Column(String(100), nullable=True)
    shipping_proof_url = Column(Text, nullable=True)

    # Post-placement inventory follow-up
    needs_reconciliation = Column(Boolean, nullable=False, default=False)
    reconciliation_note = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    lines = relationship(
        "OrderLineModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLineModel.id",
    )


class OrderLineModel(Base):
    """SQLAlchemy ORM model for order_items table."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    # Unit price at purchase time
    price = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="PKR")

    order = relationship("OrderModel", back_populates="lines")
