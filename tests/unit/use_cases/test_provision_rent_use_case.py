"""
Unit tests for ProvisionRentUseCase

Tests business logic in isolation with mocked repositories.
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from rent_service.app.use_cases.rents import ProvisionRentUseCase
from rent_service.domain.actors import Admin, Customer
from rent_service.domain.entities import InvoiceEntryStatus, RentStatus
from tests.fixtures.builders import make_initial_entry, make_ledger, make_rent


def _arrange(mock_uow, status=RentStatus.pending, paid_attempt=True, proof="proof/p/proof-1.png"):
    rent = make_rent(status=status, paid_attempt=paid_attempt)
    invoice = make_ledger(rent)
    initial = make_initial_entry(
        invoice,
        proof_of_paid=proof,
        status=InvoiceEntryStatus.pending if proof else InvoiceEntryStatus.unpaid,
    )
    mock_uow.rents.get_for_update.return_value = rent
    mock_uow.invoices.get_by_rent_id.return_value = invoice
    mock_uow.invoices.get_entries.return_value = [initial]
    return rent, initial


@pytest.mark.asyncio
async def test_successful_provisioning(mock_uow, clock):
    """Test admin approves the initial payment"""
    # Arrange
    admin = Admin(id=uuid4())
    rent, initial = _arrange(mock_uow)
    use_case = ProvisionRentUseCase(mock_uow, clock)

    # Act
    result = await use_case.execute(admin, rent.id)

    # Assert
    assert result.is_ok()
    assert result.value.rent_status == "provisioned"
    assert result.value.invoice_status == "verified"

    assert rent.status == RentStatus.provisioned
    assert rent.paid_attempt is False
    assert str(admin.id) in rent.handled_by
    assert initial.verified_by == admin.id
    assert initial.status == InvoiceEntryStatus.verified

    event = mock_uow.audit_events.create.call_args[0][0]
    assert event.action == "rent_provisioned"
    assert event.subject == initial.invoice_id
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_provisioning_records_paid_amount(mock_uow, clock):
    """Test a partial payment amount is kept on the entry"""
    rent, initial = _arrange(mock_uow)
    use_case = ProvisionRentUseCase(mock_uow, clock)

    result = await use_case.execute(Admin(id=uuid4()), rent.id, paid_amount=Decimal("750000"))

    assert result.is_ok()
    assert initial.price == Decimal("750000")


@pytest.mark.asyncio
async def test_rejecting_initial_payment(mock_uow, clock):
    """Test rejection keeps the rent pending for a new proof"""
    admin = Admin(id=uuid4())
    rent, initial = _arrange(mock_uow)
    use_case = ProvisionRentUseCase(mock_uow, clock)

    result = await use_case.execute(admin, rent.id, approve=False)

    assert result.is_ok()
    assert result.value.rent_status == "pending"
    assert result.value.invoice_status == "rejected"
    assert rent.status == RentStatus.pending
    assert rent.paid_attempt is False
    assert initial.status == InvoiceEntryStatus.rejected
    assert mock_uow.audit_events.create.call_args[0][0].action == "initial_invoice_rejected"


@pytest.mark.asyncio
async def test_missing_proof_changes_nothing(mock_uow, clock):
    """Test provisioning without a proof of payment"""
    rent, initial = _arrange(mock_uow, proof=None)
    handled_before = list(rent.handled_by)
    use_case = ProvisionRentUseCase(mock_uow, clock)

    result = await use_case.execute(Admin(id=uuid4()), rent.id)

    assert result.is_err()
    assert result.error.code == "PROOF_OF_PAYMENT_MISSING"
    assert rent.status == RentStatus.pending
    assert rent.paid_attempt is True
    assert rent.handled_by == handled_before
    assert initial.verified_by is None
    mock_uow.rents.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,paid_attempt",
    [
        (RentStatus.unpaid, False),
        (RentStatus.pending, False),
        (RentStatus.provisioned, False),
        (RentStatus.active, True),
    ],
)
async def test_rent_not_awaiting_provisioning(mock_uow, clock, status, paid_attempt):
    """Test only pending rents with a payment attempt can be provisioned"""
    rent, _ = _arrange(mock_uow, status=status, paid_attempt=paid_attempt)
    use_case = ProvisionRentUseCase(mock_uow, clock)

    result = await use_case.execute(Admin(id=uuid4()), rent.id)

    assert result.is_err()
    assert result.error.code == "RENT_NOT_PENDING"
    assert rent.status == status


@pytest.mark.asyncio
async def test_customer_cannot_provision(mock_uow, clock):
    """Test non-admins are refused"""
    use_case = ProvisionRentUseCase(mock_uow, clock)

    result = await use_case.execute(Customer(id=uuid4()), uuid4())

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"
    mock_uow.rents.get_for_update.assert_not_called()


@pytest.mark.asyncio
async def test_provision_missing_rent(mock_uow, clock):
    """Test provisioning a rent that does not exist"""
    use_case = ProvisionRentUseCase(mock_uow, clock)

    result = await use_case.execute(Admin(id=uuid4()), uuid4())

    assert result.is_err()
    assert result.error.code == "RENT_NOT_FOUND"
