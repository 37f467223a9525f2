"""
Error taxonomy of the rental core.

Every error code a use case can return belongs to exactly one ErrorKind;
the API layer maps kinds (not codes) to transport statuses.
"""

from enum import Enum
from typing import Dict

from rent_service.libs.result import Error


class ErrorKind(str, Enum):
    not_found = "not_found"
    unauthorized = "unauthorized"
    forbidden = "forbidden"
    conflict = "conflict"
    precondition_failed = "precondition_failed"
    invalid_argument = "invalid_argument"
    invalid_state = "invalid_state"
    unavailable = "unavailable"


ERROR_KINDS: Dict[str, ErrorKind] = {
    "SPACE_NOT_FOUND": ErrorKind.not_found,
    "RENT_NOT_FOUND": ErrorKind.not_found,
    "INVOICE_NOT_FOUND": ErrorKind.not_found,
    "INVOICE_ENTRY_NOT_FOUND": ErrorKind.not_found,
    "CONTRACT_DOCUMENT_NOT_FOUND": ErrorKind.not_found,
    "UNAUTHORIZED": ErrorKind.unauthorized,
    "INSUFFICIENT_ROLE": ErrorKind.forbidden,
    "NOT_RENT_OWNER": ErrorKind.forbidden,
    "SPACE_ALREADY_CLAIMED": ErrorKind.conflict,
    "SPACE_NOT_PUBLISHED": ErrorKind.conflict,
    "INVOICE_ALREADY_VERIFIED": ErrorKind.conflict,
    "RENT_NOT_PENDING": ErrorKind.precondition_failed,
    "PROOF_OF_PAYMENT_MISSING": ErrorKind.precondition_failed,
    "RENT_NOT_PROVISIONED": ErrorKind.precondition_failed,
    "INITIAL_INVOICE_NOT_VERIFIABLE": ErrorKind.invalid_argument,
    "INVOICE_NOT_YET_RELEASED": ErrorKind.invalid_state,
    "RENT_NOT_ACTIVE": ErrorKind.invalid_state,
    "STORAGE_UNAVAILABLE": ErrorKind.unavailable,
}


def insufficient_role(action: str) -> Error:
    return Error("INSUFFICIENT_ROLE", f"Your role is not allowed to {action}")


def rent_not_found() -> Error:
    return Error("RENT_NOT_FOUND", "Rent with such id does not exist")


def not_rent_owner() -> Error:
    return Error("NOT_RENT_OWNER", "This rent does not belong to you")


def storage_unavailable(detail: str) -> Error:
    return Error("STORAGE_UNAVAILABLE", f"Object storage unavailable: {detail}")
