from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


def _row(service: str = "Consulting", quantity: str = "3", amount: str = "12.50") -> dict:
    return {"service": service, "quantity": quantity, "amount": amount}


def test_create_invoice_computes_sums(auth_headers, create_customer, create_invoice) -> None:
    headers = auth_headers()
    customer = create_customer(headers)

    invoice = create_invoice(headers, customer["id"], rows=[_row("Design"), _row("Hosting")])

    assert [Decimal(row["sum"]) for row in invoice["rows"]] == [Decimal("37.50"), Decimal("37.50")]
    assert Decimal(invoice["total_sum"]) == Decimal("75.00")
    assert invoice["status"] == "Created"


def test_client_supplied_totals_are_ignored(auth_headers, create_customer) -> None:
    headers = auth_headers()
    customer = create_customer(headers)

    response = client.post(
        "/api/invoices/",
        json={
            "customer_id": customer["id"],
            "start_date": "2024-01-01T00:00:00",
            "end_date": "2024-01-31T00:00:00",
            "rows": [{**_row(), "sum": "999.99"}],
            "total_sum": "999.99",
        },
        headers=headers,
    )

    assert response.status_code == 201
    assert Decimal(response.json()["total_sum"]) == Decimal("37.50")


def test_invoice_validation(auth_headers, create_customer) -> None:
    headers = auth_headers()
    customer = create_customer(headers)
    base = {"customer_id": customer["id"], "start_date": "2024-01-01T00:00:00", "end_date": "2024-01-31T00:00:00"}

    assert client.post("/api/invoices/", json={**base, "rows": []}, headers=headers).status_code == 422
    negative = {**base, "rows": [_row(quantity="-1")]}
    assert client.post("/api/invoices/", json=negative, headers=headers).status_code == 422
    reversed_period = {**base, "start_date": "2024-02-01T00:00:00", "rows": [_row()]}
    assert client.post("/api/invoices/", json=reversed_period, headers=headers).status_code == 422


def test_cannot_invoice_another_users_customer(auth_headers, create_customer) -> None:
    owner = auth_headers()
    stranger = auth_headers()
    customer = create_customer(owner)

    response = client.post(
        "/api/invoices/",
        json={
            "customer_id": customer["id"],
            "start_date": "2024-01-01T00:00:00",
            "end_date": "2024-01-31T00:00:00",
            "rows": [_row()],
        },
        headers=stranger,
    )

    assert response.status_code == 404


def test_invoices_of_other_users_are_invisible(auth_headers, create_customer, create_invoice) -> None:
    owner = auth_headers()
    stranger = auth_headers()
    invoice = create_invoice(owner, create_customer(owner)["id"])

    assert client.get(f"/api/invoices/{invoice['id']}", headers=stranger).status_code == 404
    assert client.get("/api/invoices/", headers=stranger).json()["items"] == []
    assert client.delete(f"/api/invoices/{invoice['id']}", headers=stranger).status_code == 404


def test_edit_invoice_header(auth_headers, create_customer, create_invoice) -> None:
    headers = auth_headers()
    invoice = create_invoice(headers, create_customer(headers)["id"])

    response = client.put(
        f"/api/invoices/{invoice['id']}",
        json={"comment": "Updated", "end_date": "2024-02-15T00:00:00"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["comment"] == "Updated"
    assert Decimal(response.json()["total_sum"]) == Decimal("37.50")

    reversed_period = client.put(
        f"/api/invoices/{invoice['id']}", json={"end_date": "2023-12-01T00:00:00"}, headers=headers
    )
    assert reversed_period.status_code == 422


@pytest.mark.parametrize("locked_status", ["Sent", "Received", "Rejected"])
def test_locked_invoice_rejects_edits_and_deletion(
    auth_headers, create_customer, create_invoice, locked_status: str
) -> None:
    headers = auth_headers()
    invoice = create_invoice(headers, create_customer(headers)["id"])
    invoice_url = f"/api/invoices/{invoice['id']}"

    locked = client.patch(f"{invoice_url}/status", json={"status": locked_status}, headers=headers)
    assert locked.status_code == 200
    assert locked.json()["status"] == locked_status

    assert client.put(invoice_url, json={"comment": "Too late"}, headers=headers).status_code == 409
    assert client.post(f"{invoice_url}/rows", json=_row(), headers=headers).status_code == 409
    assert client.put(f"{invoice_url}/rows", json={"rows": [_row()]}, headers=headers).status_code == 409
    assert client.delete(invoice_url, headers=headers).status_code == 409
    assert client.get(invoice_url, headers=headers).status_code == 200

    paid = client.patch(f"{invoice_url}/status", json={"status": "Paid"}, headers=headers)
    assert paid.status_code == 200
    assert client.delete(invoice_url, headers=headers).status_code == 200


def test_row_mutations_recompute_the_total(auth_headers, create_customer, create_invoice) -> None:
    headers = auth_headers()
    invoice = create_invoice(headers, create_customer(headers)["id"])
    invoice_url = f"/api/invoices/{invoice['id']}"

    added = client.post(f"{invoice_url}/rows", json=_row("Support", "2", "10.00"), headers=headers)
    assert added.status_code == 201
    assert Decimal(added.json()["total_sum"]) == Decimal("57.50")
    assert len(added.json()["rows"]) == 2

    first_row_id = added.json()["rows"][0]["id"]
    removed = client.delete(f"{invoice_url}/rows/{first_row_id}", headers=headers)
    assert removed.status_code == 200
    assert [row["service"] for row in removed.json()["rows"]] == ["Support"]
    assert Decimal(removed.json()["total_sum"]) == Decimal("20.00")

    replaced = client.put(
        f"{invoice_url}/rows",
        json={"rows": [_row("Audit", "1.5", "0.33"), _row("Travel", "1", "100")]},
        headers=headers,
    )
    assert replaced.status_code == 200
    assert [Decimal(row["sum"]) for row in replaced.json()["rows"]] == [Decimal("0.495"), Decimal("100")]
    assert Decimal(replaced.json()["total_sum"]) == Decimal("100.495")


def test_last_row_cannot_be_removed(auth_headers, create_customer, create_invoice) -> None:
    headers = auth_headers()
    invoice = create_invoice(headers, create_customer(headers)["id"])
    invoice_url = f"/api/invoices/{invoice['id']}"

    only_row_id = invoice["rows"][0]["id"]
    assert client.delete(f"{invoice_url}/rows/{only_row_id}", headers=headers).status_code == 422
    assert client.delete(f"{invoice_url}/rows/999999", headers=headers).status_code == 404


def test_delete_draft_invoice_returns_it(auth_headers, create_customer, create_invoice) -> None:
    headers = auth_headers()
    invoice = create_invoice(headers, create_customer(headers)["id"])

    response = client.delete(f"/api/invoices/{invoice['id']}", headers=headers)

    assert response.status_code == 200
    assert response.json()["id"] == invoice["id"]
    assert len(response.json()["rows"]) == 1
    assert client.get(f"/api/invoices/{invoice['id']}", headers=headers).status_code == 404


def test_list_invoices_orders_by_row_count_and_searches_comment(
    auth_headers, create_customer, create_invoice
) -> None:
    headers = auth_headers()
    customer_id = create_customer(headers)["id"]
    create_invoice(headers, customer_id, rows=[_row()], comment="January retainer")
    create_invoice(headers, customer_id, rows=[_row(), _row(), _row()], comment="February project")
    create_invoice(headers, customer_id, rows=[_row(), _row()], comment="March retainer")

    descending = client.get("/api/invoices/", params={"order_by": "Descending"}, headers=headers).json()
    assert [len(item["rows"]) for item in descending["items"]] == [3, 2, 1]
    assert descending["meta"] == {"page": 1, "page_size": 10, "total_pages": 1}

    searched = client.get("/api/invoices/", params={"search": "retainer"}, headers=headers).json()
    assert [item["comment"] for item in searched["items"]] == ["January retainer", "March retainer"]

    assert client.get("/api/invoices/", params={"search": "Retainer"}, headers=headers).json()["items"] == []


def test_fractional_row_sum_is_stored_exactly(auth_headers, create_customer, create_invoice) -> None:
    headers = auth_headers()
    invoice = create_invoice(
        headers,
        create_customer(headers)["id"],
        rows=[_row("Storage", "0.333", "1.00"), _row("Bandwidth", "2.125", "0.99")],
    )

    fetched = client.get(f"/api/invoices/{invoice['id']}", headers=headers).json()

    assert [Decimal(row["sum"]) for row in fetched["rows"]] == [Decimal("0.333"), Decimal("2.10375")]
    assert Decimal(fetched["total_sum"]) == Decimal("2.43675")
