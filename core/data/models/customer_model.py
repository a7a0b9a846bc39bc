"""Customer profiles as exposed by the identity provider."""

from sqlalchemy import Column, String

from .base import Base


class CustomerModel(Base):
    __tablename__ = "customers"

    id = Column(String(64), primary_key=True)
    email = Column(String(255), nullable=True)
    full_name = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default="customer")
