"""
Library Ledger Django Adapter Tests
====================================
Routes, caller header, envelope, and status codes through the
Django test client.
"""

import json

import pytest

from adapters.django_api.wiring import get_library, reset_library
from core.config.settings import LedgerSettings

ADMIN = "0xadmin"


@pytest.fixture(autouse=True)
def fresh_ledger(settings):
    settings.LEDGER_SETTINGS = LedgerSettings(admin_id=ADMIN)
    reset_library()
    yield
    reset_library()


def _post(client, path, body, caller=None):
    headers = {"HTTP_X_ACTOR_ID": caller} if caller else {}
    return client.post(
        path, data=json.dumps(body), content_type="application/json", **headers)


def _seed(client):
    _post(client, "/v1/books/add", {"content_id": "QmTest123456789", "stock": 1}, ADMIN)
    _post(client, "/v1/members/register", {"name": "Alice"}, "0xalice")


# ══════════════════════════════════════════════════════════════
# BOOKS
# ══════════════════════════════════════════════════════════════

class TestBooks:
    def test_admin_adds_book(self, client):
        response = _post(
            client, "/v1/books/add", {"content_id": "QmTest123456789", "stock": 5}, ADMIN)
        assert response.status_code == 200
        assert response.json() == {"ok": True, "data": {"book_id": 1}}

        detail = client.get("/v1/books/1").json()["data"]
        assert detail == {
            "book_id": 1, "content_id": "QmTest123456789", "stock": 5, "exists": True,
        }

    def test_non_admin_forbidden(self, client):
        response = _post(client, "/v1/books/add", {"content_id": "Qm", "stock": 1}, "0xalice")
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "ADMIN_ONLY"

    def test_invalid_stock_is_bad_request(self, client):
        response = _post(client, "/v1/books/add", {"content_id": "Qm", "stock": 0}, ADMIN)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_STOCK"

    def test_stock_update(self, client):
        _seed(client)
        response = _post(client, "/v1/books/1/stock", {"new_stock": 7}, ADMIN)
        assert response.status_code == 200
        assert response.json()["data"]["stock"] == 7

    def test_stock_update_unknown_book(self, client):
        response = _post(client, "/v1/books/9/stock", {"new_stock": 7}, ADMIN)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BOOK_NOT_FOUND"

    def test_unknown_book_is_404(self, client):
        response = client.get("/v1/books/3")
        assert response.status_code == 404

    def test_list_books(self, client):
        _seed(client)
        data = client.get("/v1/books").json()["data"]
        assert data["count"] == 1
        assert data["items"][0]["book_id"] == 1


# ══════════════════════════════════════════════════════════════
# MEMBERS & LOANS
# ══════════════════════════════════════════════════════════════

class TestLoans:
    def test_borrow_and_return(self, client):
        _seed(client)

        borrowed = _post(client, "/v1/loans/borrow", {"book_id": 1}, "0xalice")
        assert borrowed.status_code == 200
        assert borrowed.json()["data"] == {"record_id": 1, "book_id": 1}

        member = client.get("/v1/members/0xalice").json()["data"]
        assert member["is_member"] is True
        assert member["current_borrow"] == 1

        returned = _post(client, "/v1/loans/return", {"book_id": 1}, "0xalice")
        assert returned.status_code == 200

        history = client.get("/v1/members/0xalice/history").json()["data"]
        assert history["count"] == 1
        assert history["items"][0]["returned"] is True

        book_history = client.get("/v1/books/1/history").json()["data"]
        assert book_history["items"][0]["borrower"] == "0xalice"

    def test_out_of_stock_is_conflict(self, client):
        _seed(client)
        _post(client, "/v1/members/register", {"name": "Bob"}, "0xbob")
        _post(client, "/v1/loans/borrow", {"book_id": 1}, "0xalice")

        response = _post(client, "/v1/loans/borrow", {"book_id": 1}, "0xbob")
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "OUT_OF_STOCK"

    def test_non_member_borrow_forbidden(self, client):
        _seed(client)
        response = _post(client, "/v1/loans/borrow", {"book_id": 1}, "0xstranger")
        assert response.status_code == 403

    def test_duplicate_registration_is_conflict(self, client):
        _seed(client)
        response = _post(client, "/v1/members/register", {"name": "Alice"}, "0xalice")
        assert response.status_code == 409

    def test_unknown_member(self, client):
        data = client.get("/v1/members/0xnobody").json()["data"]
        assert data["is_member"] is False
        assert data["member"] is None

    def test_loan_history_and_stats(self, client):
        _seed(client)
        _post(client, "/v1/loans/borrow", {"book_id": 1}, "0xalice")

        loans = client.get("/v1/loans/history").json()["data"]
        assert loans["count"] == 1
        assert client.get("/v1/stats").json()["data"] == {
            "total_books": 1, "total_members": 1,
            "total_borrows": 1, "active_loans": 1,
        }


# ══════════════════════════════════════════════════════════════
# ADMIN
# ══════════════════════════════════════════════════════════════

class TestAdmin:
    def test_read_admin(self, client):
        assert client.get("/v1/admin").json()["data"] == {"admin": ADMIN}

    def test_transfer(self, client):
        response = _post(client, "/v1/admin/transfer", {"new_admin_id": "0xnext"}, ADMIN)
        assert response.status_code == 200
        assert get_library().admin == "0xnext"

    def test_transfer_by_non_admin_forbidden(self, client):
        response = _post(client, "/v1/admin/transfer", {"new_admin_id": "0xme"}, "0xme")
        assert response.status_code == 403


# ══════════════════════════════════════════════════════════════
# TRANSPORT ERRORS
# ══════════════════════════════════════════════════════════════

class TestTransportErrors:
    def test_missing_caller_header(self, client):
        response = _post(client, "/v1/members/register", {"name": "Alice"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_malformed_json(self, client):
        response = client.post(
            "/v1/loans/borrow", data="{not json", content_type="application/json",
            HTTP_X_ACTOR_ID="0xalice",
        )
        assert response.status_code == 400

    def test_missing_field(self, client):
        response = _post(client, "/v1/loans/borrow", {}, "0xalice")
        assert response.status_code == 400
        assert "book_id" in response.json()["error"]["message"]

    def test_wrong_field_type(self, client):
        response = _post(client, "/v1/loans/borrow", {"book_id": "1"}, "0xalice")
        assert response.status_code == 400

    def test_wrong_method(self, client):
        assert client.get("/v1/loans/borrow").status_code == 405
        assert client.post("/v1/stats").status_code == 405

    def test_custom_actor_header(self, client, settings):
        settings.LEDGER_SETTINGS = LedgerSettings(admin_id=ADMIN, actor_header="X-Caller")
        reset_library()
        response = client.post(
            "/v1/members/register", data=json.dumps({"name": "Alice"}),
            content_type="application/json", HTTP_X_CALLER="0xalice",
        )
        assert response.status_code == 200
        assert get_library().is_member("0xalice")
