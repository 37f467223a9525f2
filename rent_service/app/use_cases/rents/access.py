"""Visibility rules shared by the read-side rent use cases."""

from rent_service.domain.actors import Actor, Admin, Customer, Provider
from rent_service.domain.entities import Rent


def can_view(actor: Actor, rent: Rent) -> bool:
    if isinstance(actor, Admin):
        return True
    if isinstance(actor, Provider):
        return rent.provider_id == actor.provider_id
    if isinstance(actor, Customer):
        return rent.customer_id == actor.id
    return False
