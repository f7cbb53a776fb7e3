from datetime import date, timedelta

import pytest

from medishare.shared.database.models import InventoryItem

API = "/api/v1"


def register_clinic(client, name, **extra):
    payload = {"name": name, "type": "NGO", "state": "Maharashtra", **extra}
    response = client.post(f"{API}/clinics", json=payload)
    assert response.status_code == 201
    return response.json()


def add_stock(client, clinic_id, quantity=2000, days=30, medicine=None, medicine_id=None):
    payload = {
        "clinic_id": clinic_id,
        "batch_number": "AMX-2026-01",
        "quantity": quantity,
        "unit": "tablets",
        "expiry_date": (date.today() + timedelta(days=days)).isoformat(),
    }
    if medicine_id is not None:
        payload["medicine_id"] = medicine_id
    else:
        payload["medicine"] = medicine or {"name": "Amoxicillin", "strength": "500mg", "category": "Antibiotic"}
    response = client.post(f"{API}/inventory", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def network(client):
    giver = register_clinic(client, "Seva Sadan NGO Clinic")
    receiver = register_clinic(client, "Gram Swasthya Kendra", type="Primary Health Center")
    bystander = register_clinic(client, "Asha Community Clinic")

    item = add_stock(client, giver["id"])
    surplus = client.post(f"{API}/surplus", json={
        "clinic_id": giver["id"],
        "inventory_item_id": item["id"],
        "quantity": 1500,
        "reason": "Near Expiry",
    }).json()
    shortage = client.post(f"{API}/requests", json={
        "clinic_id": receiver["id"],
        "medicine_id": item["medicine_id"],
        "quantity": 1000,
        "urgency": "Critical",
    }).json()

    return {
        "giver": giver,
        "receiver": receiver,
        "bystander": bystander,
        "item": item,
        "surplus": surplus,
        "request": shortage,
    }


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "running"
    assert client.get("/health").json()["status"] == "healthy"
    assert "transfers" in client.get(f"{API}/").json()["available_endpoints"]


def test_inventory_entry_creates_medicine_on_demand(client):
    clinic = register_clinic(client, "Hope Foundation Hospital")

    first = add_stock(client, clinic["id"], medicine={"name": "Metformin", "strength": "500mg"})
    second = add_stock(client, clinic["id"], medicine={"name": "metformin", "strength": "500mg"})

    assert first["medicine_id"] == second["medicine_id"]
    medicines = client.get(f"{API}/inventory/medicines").json()
    assert [m["name"] for m in medicines] == ["Metformin"]


def test_inventory_status_is_derived(client):
    clinic = register_clinic(client, "Mobile Health Unit - Rural")

    assert add_stock(client, clinic["id"], quantity=1000, days=-5)["status"] == "Expired"
    assert add_stock(client, clinic["id"], quantity=1000, days=30)["status"] == "Expiring Soon"
    assert add_stock(client, clinic["id"], quantity=100, days=300)["status"] == "Low Stock"
    assert add_stock(client, clinic["id"], quantity=1000, days=300)["status"] == "In Stock"


def test_inventory_entry_needs_a_medicine(client):
    clinic = register_clinic(client, "Hope Foundation Hospital")

    response = client.post(f"{API}/inventory", json={
        "clinic_id": clinic["id"],
        "batch_number": "X",
        "quantity": 10,
        "expiry_date": date.today().isoformat(),
    })

    assert response.status_code == 422


def test_surplus_cannot_exceed_stock(client, network):
    response = client.post(f"{API}/surplus", json={
        "clinic_id": network["giver"]["id"],
        "inventory_item_id": network["item"]["id"],
        "quantity": 5000,
        "reason": "Overstocked",
    })

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "DATA_INTEGRITY"


def test_surplus_must_come_from_own_inventory(client, network):
    response = client.post(f"{API}/surplus", json={
        "clinic_id": network["receiver"]["id"],
        "inventory_item_id": network["item"]["id"],
        "quantity": 10,
    })

    assert response.status_code == 422


def test_expired_stock_cannot_be_posted(client):
    clinic = register_clinic(client, "Hope Foundation Hospital")
    item = add_stock(client, clinic["id"], days=-1)

    response = client.post(f"{API}/surplus", json={
        "clinic_id": clinic["id"],
        "inventory_item_id": item["id"],
        "quantity": 10,
    })

    assert response.status_code == 409
    assert response.json()["error_code"] == "INVALID_STATE"


def test_matches_endpoint(client, network):
    response = client.get(f"{API}/matching/matches")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    match = body["matches"][0]
    assert match["surplus_posting_id"] == network["surplus"]["id"]
    assert match["request_id"] == network["request"]["id"]
    assert match["from_clinic"]["clinic_id"] == network["giver"]["id"]
    assert match["to_clinic"]["clinic_id"] == network["receiver"]["id"]
    assert match["transferable_quantity"] == 1000
    assert 0 <= match["match_score"] <= 100


def test_matches_filtered_by_viewing_clinic(client, network):
    for clinic in ("giver", "receiver"):
        body = client.get(f"{API}/matching/matches", params={"clinic_id": network[clinic]["id"]}).json()
        assert body["total"] == 1

    body = client.get(f"{API}/matching/matches", params={"clinic_id": network["bystander"]["id"]}).json()
    assert body["total"] == 0
    assert body["matches"] == []


def test_transfer_flow_over_http(client, network):
    response = client.post(f"{API}/transfers", json={
        "surplus_posting_id": network["surplus"]["id"],
        "request_id": network["request"]["id"],
    })
    assert response.status_code == 201
    transfer = response.json()["transfer"]
    assert transfer["status"] == "Pending"
    assert transfer["quantity"] == 1000

    assert client.get(f"{API}/surplus/{network['surplus']['id']}").json()["status"] == "Reserved"
    assert client.get(f"{API}/requests/{network['request']['id']}").json()["status"] == "Matched"
    assert client.get(f"{API}/matching/matches").json()["total"] == 0

    for step, status in (("approve", "Approved"), ("in-transit", "In Transit"), ("complete", "Completed")):
        response = client.post(f"{API}/transfers/{transfer['id']}/{step}")
        assert response.status_code == 200, response.text
        assert response.json()["transfer"]["status"] == status

    assert client.get(f"{API}/surplus/{network['surplus']['id']}").json()["status"] == "Transferred"
    assert client.get(f"{API}/requests/{network['request']['id']}").json()["status"] == "Fulfilled"
    assert client.get(f"{API}/inventory/{network['item']['id']}").json()["quantity"] == 1000


def test_second_proposal_conflicts(client, network):
    payload = {
        "surplus_posting_id": network["surplus"]["id"],
        "request_id": network["request"]["id"],
    }
    assert client.post(f"{API}/transfers", json=payload).status_code == 201

    response = client.post(f"{API}/transfers", json=payload)

    assert response.status_code == 409
    assert response.json()["error_code"] == "INVALID_STATE"


def test_reject_over_http_reopens_match(client, network):
    transfer = client.post(f"{API}/transfers", json={
        "surplus_posting_id": network["surplus"]["id"],
        "request_id": network["request"]["id"],
    }).json()["transfer"]

    response = client.post(f"{API}/transfers/{transfer['id']}/reject", json={"reason": "Out of cold storage"})

    assert response.status_code == 200
    assert response.json()["transfer"]["status"] == "Rejected"
    assert client.get(f"{API}/matching/matches").json()["total"] == 1


def test_unknown_transfer_is_404(client):
    response = client.post(f"{API}/transfers/999/approve")

    assert response.status_code == 404
    assert response.json()["error_code"] == "NOT_FOUND"


def test_clinic_transfer_lists(client, network):
    client.post(f"{API}/transfers", json={
        "surplus_posting_id": network["surplus"]["id"],
        "request_id": network["request"]["id"],
    })

    body = client.get(f"{API}/transfers/clinic/{network['receiver']['id']}").json()

    assert len(body["incoming"]) == 1
    assert body["outgoing"] == []


def test_cancel_surplus_and_request(client, network):
    response = client.post(f"{API}/surplus/{network['surplus']['id']}/cancel")
    assert response.status_code == 200
    assert response.json()["status"] == "Cancelled"
    assert client.post(f"{API}/surplus/{network['surplus']['id']}/cancel").status_code == 409

    response = client.post(f"{API}/requests/{network['request']['id']}/cancel")
    assert response.status_code == 200
    assert response.json()["status"] == "Cancelled"

    assert client.get(f"{API}/matching/matches").json()["total"] == 0


def test_reserved_surplus_cannot_be_cancelled(client, network):
    client.post(f"{API}/transfers", json={
        "surplus_posting_id": network["surplus"]["id"],
        "request_id": network["request"]["id"],
    })

    assert client.post(f"{API}/surplus/{network['surplus']['id']}/cancel").status_code == 409
    assert client.post(f"{API}/requests/{network['request']['id']}/cancel").status_code == 409


def test_dashboard_counters(client, network):
    body = client.get(f"{API}/clinics/{network['giver']['id']}/dashboard").json()
    counters = body["counters"]
    assert counters["inventory_items"] == 1
    assert counters["expiring_soon"] == 1
    assert counters["available_surplus"] == 1
    assert counters["transfers"] == 0

    counters = client.get(f"{API}/clinics/{network['receiver']['id']}/dashboard").json()["counters"]
    assert counters["open_requests"] == 1
    assert counters["critical_requests"] == 1


def test_dashboard_reclassifies_aged_stock(client, db):
    clinic = register_clinic(client, "Hope Foundation Hospital")
    item = add_stock(client, clinic["id"], quantity=1000, days=200)
    assert item["status"] == "In Stock"

    stored = db.get(InventoryItem, item["id"])
    stored.expiry_date = date.today() + timedelta(days=10)
    db.commit()

    counters = client.get(f"{API}/clinics/{clinic['id']}/dashboard").json()["counters"]

    assert counters["inventory_items"] == 1
    assert counters["expiring_soon"] == 1
    assert client.get(f"{API}/inventory/{item['id']}").json()["status"] == "Expiring Soon"


def test_unknown_clinic_dashboard(client):
    assert client.get(f"{API}/clinics/77/dashboard").status_code == 404
