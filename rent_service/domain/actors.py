"""
Caller identities.

The identity gate classifies every authenticated caller into exactly one
of these; use cases guard on the concrete type.
"""

from typing import Literal, Union
from uuid import UUID

from pydantic import BaseModel


class Customer(BaseModel):
    role: Literal["customer"] = "customer"
    id: UUID


class Provider(BaseModel):
    role: Literal["provider"] = "provider"
    id: UUID
    provider_id: UUID


class Admin(BaseModel):
    role: Literal["admin"] = "admin"
    id: UUID


Actor = Union[Customer, Provider, Admin]
