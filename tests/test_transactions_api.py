"""Tests for the /transactions endpoints."""

from decimal import Decimal

import pytest


@pytest.fixture
def joao(register):
    return register()


@pytest.fixture
def maria(register):
    return register(email="maria@email.com", name="Maria Souza")


def _setup(client, headers, account_name="Nubank", category_name="Mercado"):
    account_id = client.post(
        "/accounts/",
        json={"account_name": account_name, "account_type": "Checking", "initial_balance": "100.00"},
        headers=headers,
    ).json()["id"]
    category_id = client.post("/categories/", json={"name": category_name}, headers=headers).json()["id"]
    return account_id, category_id


def transaction(account_id, category_id, **overrides):
    payload = {
        "transaction_type": "EXPENSE",
        "transaction_date": "2024-01-10",
        "amount": "123.45",
        "description": "Supermercado",
        "notes": "Compra do mês",
        "status": "PAID",
        "account_id": account_id,
        "category_id": category_id,
    }
    payload.update(overrides)
    return payload


class TestTransactions:

    def test_create_keeps_amount_exact(self, client, joao):
        account_id, category_id = _setup(client, joao)

        created = client.post("/transactions/", json=transaction(account_id, category_id), headers=joao)
        assert created.status_code == 201

        fetched = client.get(f"/transactions/{created.json()['id']}", headers=joao).json()
        assert Decimal(fetched["amount"]) == Decimal("123.45")
        assert fetched["amount"] in ("123.45", 123.45)
        assert fetched["account_name"] == "Nubank"
        assert fetched["category_name"] == "Mercado"
        assert fetched["transaction_date"] == "2024-01-10"

    def test_optional_fields(self, client, joao):
        account_id, category_id = _setup(client, joao)
        payload = transaction(account_id, category_id)
        del payload["description"]
        del payload["notes"]

        response = client.post("/transactions/", json=payload, headers=joao)

        assert response.status_code == 201
        assert response.json()["description"] is None
        assert response.json()["notes"] is None

    @pytest.mark.parametrize("override", [
        {"amount": "0"},
        {"amount": "-10.00"},
        {"amount": "1e30"},
        {"amount": "10000000000000000"},
        {"transaction_type": "x" * 21},
        {"status": ""},
        {"description": "x" * 101},
        {"notes": "x" * 256},
    ])
    def test_validation(self, client, joao, override):
        account_id, category_id = _setup(client, joao)
        response = client.post("/transactions/", json=transaction(account_id, category_id, **override), headers=joao)
        assert response.status_code == 400

    def test_unknown_references_are_404(self, client, joao):
        account_id, category_id = _setup(client, joao)

        assert client.post("/transactions/", json=transaction(999, category_id), headers=joao).status_code == 404
        assert client.post("/transactions/", json=transaction(account_id, 999), headers=joao).status_code == 404

    def test_foreign_references_are_rejected(self, client, joao, maria):
        account_id, category_id = _setup(client, joao)
        maria_account, maria_category = _setup(client, maria)

        foreign_account = client.post(
            "/transactions/", json=transaction(maria_account, category_id), headers=joao
        )
        foreign_category = client.post(
            "/transactions/", json=transaction(account_id, maria_category), headers=joao
        )

        assert foreign_account.status_code == 400
        assert foreign_account.json()["detail"] == "Account does not belong to authenticated user"
        assert foreign_category.status_code == 400
        assert foreign_category.json()["detail"] == "Category does not belong to authenticated user"

    def test_update(self, client, joao):
        account_id, category_id = _setup(client, joao)
        other_account, other_category = _setup(client, joao, "Itau", "Lazer")
        transaction_id = client.post(
            "/transactions/", json=transaction(account_id, category_id), headers=joao
        ).json()["id"]

        response = client.put(
            f"/transactions/{transaction_id}",
            json=transaction(other_account, other_category, amount="0.10", transaction_type="INCOME", status="PENDING"),
            headers=joao,
        )

        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["amount"]) == Decimal("0.10")
        assert body["transaction_type"] == "INCOME"
        assert body["account_name"] == "Itau"
        assert body["category_name"] == "Lazer"

    def test_list_only_own(self, client, joao, maria):
        account_id, category_id = _setup(client, joao)
        maria_account, maria_category = _setup(client, maria)
        client.post("/transactions/", json=transaction(account_id, category_id, amount="1.00"), headers=joao)
        client.post("/transactions/", json=transaction(account_id, category_id, amount="2.00"), headers=joao)
        client.post("/transactions/", json=transaction(maria_account, maria_category), headers=maria)

        amounts = [Decimal(t["amount"]) for t in client.get("/transactions/", headers=joao).json()]
        assert amounts == [Decimal("1.00"), Decimal("2.00")]

    def test_other_user_is_rejected(self, client, joao, maria):
        account_id, category_id = _setup(client, joao)
        transaction_id = client.post(
            "/transactions/", json=transaction(account_id, category_id), headers=joao
        ).json()["id"]

        for response in (
            client.get(f"/transactions/{transaction_id}", headers=maria),
            client.put(f"/transactions/{transaction_id}", json=transaction(account_id, category_id), headers=maria),
            client.delete(f"/transactions/{transaction_id}", headers=maria),
        ):
            assert response.status_code == 400
            assert response.json()["detail"] == "Transaction does not belong to authenticated user"

    def test_delete_account_cascades(self, client, joao):
        account_id, category_id = _setup(client, joao)
        transaction_id = client.post(
            "/transactions/", json=transaction(account_id, category_id), headers=joao
        ).json()["id"]

        assert client.delete(f"/accounts/{account_id}", headers=joao).status_code == 204
        assert client.get(f"/transactions/{transaction_id}", headers=joao).status_code == 404

    def test_delete(self, client, joao):
        account_id, category_id = _setup(client, joao)
        transaction_id = client.post(
            "/transactions/", json=transaction(account_id, category_id), headers=joao
        ).json()["id"]

        assert client.delete(f"/transactions/{transaction_id}", headers=joao).status_code == 204
        assert client.delete(f"/transactions/{transaction_id}", headers=joao).status_code == 404
