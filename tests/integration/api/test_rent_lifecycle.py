from datetime import timedelta
from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select

from rent_service.domain.entities import AuditEvent
from tests.utils.http import auth_headers, drive_to_active, request_rent, upload
from tests.utils.json_compare import exclude_keys


@pytest.mark.asyncio
async def test_full_contract_lifecycle(client: AsyncClient, spaces, test_data, clock):
    """Request to active

    Given a published space
    When a customer requests and pays, an admin provisions
    And the provider uploads the contract document
    Then the rent is active with eleven monthly invoices appended
    And ttl equals the release date of the first monthly invoice
    """
    customer_id = uuid4()
    admin_id = uuid4()
    space = spaces[0]
    customer = auth_headers("customer", customer_id)

    requested = await request_rent(client, space.id, customer_id)
    rent_id = requested["rent"]["id"]
    initial_id = requested["initial_invoice"]["invoice_id"]

    paid = await client.post(
        f"/rents/{rent_id}/invoices/{initial_id}/pay",
        files=upload(test_data, "proof", b"deposit receipt"),
        headers=customer,
    )
    assert paid.status_code == 201
    assert paid.json()["rent_status"] == "pending"
    assert paid.json()["invoice_status"] == "pending"
    assert paid.json()["proof_of_paid"].startswith(f"proof/{space.provider_id}/proof-{rent_id}-")

    clock.advance(timedelta(hours=2))
    provisioned = await client.post(
        f"/rents/{rent_id}/provision", headers=auth_headers("admin", admin_id)
    )
    assert provisioned.status_code == 200
    assert provisioned.json() == {"rent_status": "provisioned", "invoice_status": "verified"}

    clock.advance(timedelta(days=1))
    activated = await client.post(
        f"/rents/{rent_id}/activate",
        files=upload(test_data, "contract_document", b"%PDF-1.7 signed"),
        headers=auth_headers("provider", provider_id=space.provider_id),
    )
    assert activated.status_code == 200
    body = activated.json()
    assert body["rent_status"] == "active"
    assert body["ttl"] == "2024-04-16T00:00:00"
    assert body["contract_document"].startswith(f"rent/{space.provider_id}/baa-{rent_id}-")
    assert body["contract_document"].endswith(".pdf")
    assert len(body["scheduled_invoices"]) == 11

    detail = await client.get(f"/rents/{rent_id}", headers=customer)
    assert detail.status_code == 200
    rent = detail.json()["rent"]
    history = detail.json()["history"]

    assert rent["status"] == "active"
    assert rent["paid_attempt"] is False
    assert rent["ttl"] == history[1]["release_date"]
    assert rent["handled_by"][0] == str(customer_id)
    assert rent["handled_by"][1] == str(admin_id)
    assert len(rent["handled_by"]) == 3

    assert len(history) == 12
    assert [entry["position"] for entry in history] == list(range(12))
    assert history[0]["invoice_id"] == initial_id
    assert history[0]["status"] == "verified"
    assert history[0]["verified_by"] == str(admin_id)
    assert all(entry["invoice_id"].startswith("rnt-") for entry in history[1:])
    assert all(entry["status"] == "unpaid" for entry in history[1:])
    assert history[11]["release_date"] == "2025-02-16T00:00:00"
    assert [exclude_keys(e, {"price"}) for e in body["scheduled_invoices"]] == [
        exclude_keys(e, {"price"}) for e in history[1:]
    ]


@pytest.mark.asyncio
async def test_lifecycle_is_audited(client: AsyncClient, spaces, test_data, db_session):
    """Every transition leaves an audit event"""
    activated = await drive_to_active(client, test_data, spaces[0], uuid4())

    events = (
        await db_session.exec(
            select(AuditEvent).where(AuditEvent.rent_id == UUID(activated["rent_id"]))
        )
    ).all()

    assert sorted(event.action for event in events) == [
        "invoice_paid",
        "rent_activated",
        "rent_provisioned",
        "rent_requested",
    ]


@pytest.mark.asyncio
async def test_repeat_initial_payment(client: AsyncClient, spaces, test_data, clock):
    """Paying the initial invoice twice overwrites the proof in place"""
    customer_id = uuid4()
    customer = auth_headers("customer", customer_id)
    requested = await request_rent(client, spaces[0].id, customer_id)
    rent_id = requested["rent"]["id"]
    initial_id = requested["initial_invoice"]["invoice_id"]

    first = await client.post(
        f"/rents/{rent_id}/invoices/{initial_id}/pay",
        files=upload(test_data, "proof", b"first"),
        headers=customer,
    )
    clock.advance(timedelta(minutes=10))
    second = await client.post(
        f"/rents/{rent_id}/invoices/{initial_id}/pay",
        files=upload(test_data, "proof", b"second"),
        headers=customer,
    )

    assert first.status_code == second.status_code == 201
    assert first.json()["proof_of_paid"] != second.json()["proof_of_paid"]

    history = (await client.get(f"/rents/{rent_id}", headers=customer)).json()["history"]
    assert len(history) == 1
    assert history[0]["proof_of_paid"] == second.json()["proof_of_paid"]
    assert history[0]["paid_at"] == "2024-03-15T10:40:00"


@pytest.mark.asyncio
async def test_rejected_initial_payment_can_be_resubmitted(
    client: AsyncClient, spaces, test_data
):
    """Admin rejection keeps the rent pending until a new proof is approved"""
    customer_id = uuid4()
    customer = auth_headers("customer", customer_id)
    requested = await request_rent(client, spaces[0].id, customer_id)
    rent_id = requested["rent"]["id"]
    initial_id = requested["initial_invoice"]["invoice_id"]
    pay_url = f"/rents/{rent_id}/invoices/{initial_id}/pay"

    await client.post(pay_url, files=upload(test_data, "proof", b"blurry"), headers=customer)
    rejected = await client.post(
        f"/rents/{rent_id}/provision", json={"approve": False}, headers=auth_headers("admin")
    )
    assert rejected.status_code == 200
    assert rejected.json() == {"rent_status": "pending", "invoice_status": "rejected"}

    # Nothing awaits review anymore
    again = await client.post(f"/rents/{rent_id}/provision", headers=auth_headers("admin"))
    assert again.status_code == 412
    assert again.json()["error"]["code"] == "RENT_NOT_PENDING"

    resubmitted = await client.post(
        pay_url, files=upload(test_data, "proof", b"sharp"), headers=customer
    )
    assert resubmitted.status_code == 201
    assert resubmitted.json()["invoice_status"] == "pending"

    approved = await client.post(f"/rents/{rent_id}/provision", headers=auth_headers("admin"))
    assert approved.status_code == 200
    assert approved.json()["rent_status"] == "provisioned"


@pytest.mark.asyncio
async def test_provision_unpaid_rent(client: AsyncClient, spaces):
    """An unpaid rent cannot be provisioned"""
    requested = await request_rent(client, spaces[0].id, uuid4())

    response = await client.post(
        f"/rents/{requested['rent']['id']}/provision", headers=auth_headers("admin")
    )

    assert response.status_code == 412
    assert response.json()["error"]["code"] == "RENT_NOT_PENDING"


@pytest.mark.asyncio
async def test_activate_before_provisioning(client: AsyncClient, spaces, test_data):
    """A rent must be provisioned before the provider activates it"""
    requested = await request_rent(client, spaces[0].id, uuid4())

    response = await client.post(
        f"/rents/{requested['rent']['id']}/activate",
        files=upload(test_data, "contract_document", b"%PDF"),
        headers=auth_headers("provider", provider_id=spaces[0].provider_id),
    )

    assert response.status_code == 412
    assert response.json()["error"]["code"] == "RENT_NOT_PROVISIONED"


@pytest.mark.asyncio
async def test_pay_someone_elses_rent(client: AsyncClient, spaces, test_data):
    """Customers can only pay their own rents"""
    requested = await request_rent(client, spaces[0].id, uuid4())
    rent_id = requested["rent"]["id"]
    initial_id = requested["initial_invoice"]["invoice_id"]

    response = await client.post(
        f"/rents/{rent_id}/invoices/{initial_id}/pay",
        files=upload(test_data, "proof", b"receipt"),
        headers=auth_headers("customer"),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "NOT_RENT_OWNER"


@pytest.mark.asyncio
async def test_unknown_rent(client: AsyncClient, spaces):
    """Unknown rent ids are 404"""
    response = await client.post(f"/rents/{uuid4()}/provision", headers=auth_headers("admin"))

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "RENT_NOT_FOUND"
