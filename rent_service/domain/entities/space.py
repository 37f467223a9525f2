"""
Space Entity

Rentable unit published by a provider. Only the fields the rental core
reads are modelled here; catalog management lives elsewhere.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Numeric
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from rent_service.domain.base import utcnow


class Space(SQLModel, table=True):
    """
    Space entity - a rentable unit owned by a provider.

    Business Rules:
    - price is per month
    - rented_by is set once a Rent is requested against the space,
      which makes it unavailable for further requests
    - unpublished spaces cannot be requested
    """

    __tablename__ = "spaces"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)

    provider_id: UUID = Field(nullable=False, index=True)
    price: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))

    publish: bool = Field(default=True)
    rented_by: Optional[UUID] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_space_rented_by", "rented_by"),)
