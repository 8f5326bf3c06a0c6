"""Tests for the /accounts endpoints."""

from decimal import Decimal

import pytest


ACCOUNT = {"account_name": "Nubank", "account_type": "Checking", "initial_balance": "1500.50"}


@pytest.fixture
def joao(register):
    return register()


@pytest.fixture
def maria(register):
    return register(email="maria@email.com", name="Maria Souza")


class TestAccounts:

    def test_create_then_read_round_trip(self, client, joao):
        created = client.post("/accounts/", json=ACCOUNT, headers=joao)
        assert created.status_code == 201
        body = created.json()
        assert body["id"] > 0
        assert body["created_at"] and body["updated_at"]

        fetched = client.get(f"/accounts/{body['id']}", headers=joao)
        assert fetched.status_code == 200
        account = fetched.json()
        assert account["account_name"] == "Nubank"
        assert account["account_type"] == "Checking"
        assert Decimal(account["initial_balance"]) == Decimal("1500.50")

    def test_zero_balance_allowed(self, client, joao):
        response = client.post("/accounts/", json={**ACCOUNT, "initial_balance": "0"}, headers=joao)
        assert response.status_code == 201

    @pytest.mark.parametrize("override", [
        {"initial_balance": "-0.01"},
        {"initial_balance": "1e30"},
        {"initial_balance": "10000000000000000"},
        {"account_name": ""},
        {"account_name": "x" * 51},
        {"account_type": "x" * 31},
        {"account_type": "   "},
    ])
    def test_validation(self, client, joao, override):
        response = client.post("/accounts/", json={**ACCOUNT, **override}, headers=joao)
        assert response.status_code == 400

    def test_duplicate_name_for_same_user(self, client, joao):
        client.post("/accounts/", json=ACCOUNT, headers=joao)
        response = client.post("/accounts/", json=ACCOUNT, headers=joao)

        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]

    def test_same_name_for_different_users(self, client, joao, maria):
        assert client.post("/accounts/", json=ACCOUNT, headers=joao).status_code == 201
        assert client.post("/accounts/", json=ACCOUNT, headers=maria).status_code == 201

    def test_list_only_own_in_insertion_order(self, client, joao, maria):
        for name in ["Zeta", "Alpha", "Mid"]:
            client.post("/accounts/", json={**ACCOUNT, "account_name": name}, headers=joao)
        client.post("/accounts/", json={**ACCOUNT, "account_name": "Maria's"}, headers=maria)

        response = client.get("/accounts/", headers=joao)

        assert response.status_code == 200
        assert [a["account_name"] for a in response.json()] == ["Zeta", "Alpha", "Mid"]

    def test_update(self, client, joao):
        account_id = client.post("/accounts/", json=ACCOUNT, headers=joao).json()["id"]

        response = client.put(
            f"/accounts/{account_id}",
            json={"account_name": "Nubank PJ", "account_type": "Business", "initial_balance": "10.00"},
            headers=joao,
        )

        assert response.status_code == 200
        assert response.json()["account_name"] == "Nubank PJ"
        assert Decimal(response.json()["initial_balance"]) == Decimal("10.00")

    def test_update_keeping_name_is_not_a_conflict(self, client, joao):
        account_id = client.post("/accounts/", json=ACCOUNT, headers=joao).json()["id"]
        response = client.put(f"/accounts/{account_id}", json={**ACCOUNT, "account_type": "Savings"}, headers=joao)
        assert response.status_code == 200

    def test_update_to_taken_name_conflicts(self, client, joao):
        client.post("/accounts/", json=ACCOUNT, headers=joao)
        other_id = client.post("/accounts/", json={**ACCOUNT, "account_name": "Itau"}, headers=joao).json()["id"]

        response = client.put(f"/accounts/{other_id}", json=ACCOUNT, headers=joao)
        assert response.status_code == 400

    def test_delete(self, client, joao):
        account_id = client.post("/accounts/", json=ACCOUNT, headers=joao).json()["id"]

        assert client.delete(f"/accounts/{account_id}", headers=joao).status_code == 204
        assert client.get(f"/accounts/{account_id}", headers=joao).status_code == 404

    def test_missing_id_is_404(self, client, joao):
        assert client.get("/accounts/999", headers=joao).status_code == 404
        assert client.put("/accounts/999", json=ACCOUNT, headers=joao).status_code == 404
        assert client.delete("/accounts/999", headers=joao).status_code == 404


class TestAccountOwnership:
    """Another user's account is reported as a 400, never shown or changed."""

    def test_other_user_cannot_read_update_or_delete(self, client, joao, maria):
        account_id = client.post("/accounts/", json=ACCOUNT, headers=joao).json()["id"]

        read = client.get(f"/accounts/{account_id}", headers=maria)
        update = client.put(f"/accounts/{account_id}", json={**ACCOUNT, "account_name": "Hacked"}, headers=maria)
        delete = client.delete(f"/accounts/{account_id}", headers=maria)

        for response in (read, update, delete):
            assert response.status_code == 400
            assert response.json()["detail"] == "Account does not belong to authenticated user"

        still_there = client.get(f"/accounts/{account_id}", headers=joao)
        assert still_there.status_code == 200
        assert still_there.json()["account_name"] == "Nubank"
