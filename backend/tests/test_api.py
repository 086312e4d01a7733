"""
Tests for the HTTP API.

Scenari end-to-end sul router /api/v1 con sessione SQLite per richiesta.
"""

import pytest

API = "/api/v1"

ITEMS = [
    {"description": "Conseil", "quantity": "2", "unit_price": "50.00", "tax_rate": "20"},
    {"description": "Audit", "quantity": "1", "unit_price": "100.00", "tax_rate": "20", "prestation_id": 7},
]


@pytest.fixture
async def client_id(api_client) -> int:
    response = await api_client.post(f"{API}/clients/", json={"name": "Atelier Dupont"})
    assert response.status_code == 201
    return response.json()["id"]


def document(number: str, client_id: int, **extra) -> dict:
    payload = {
        "number": number,
        "client_id": client_id,
        "object": "Mission de conseil",
        "items": ITEMS,
        "total_ht": "200.00",
        "total_tva": "40.00",
        "total_ttc": "240.00",
    }
    payload.update(extra)
    return payload


async def actions(api_client, invoice_id: int) -> list[str]:
    response = await api_client.get(f"{API}/invoices/{invoice_id}/events")
    assert response.status_code == 200
    return [event["action"] for event in response.json()]


# ============================================================
# Scenari del ciclo di vita
# ============================================================


class TestLifecycleScenarios:
    """Preventivo → fattura → emissione → pagamento."""

    async def test_quote_conversion(self, api_client, client_id):
        """Test conversione e seconda conversione rifiutata."""
        quote = await api_client.post(f"{API}/quotes/", json=document("Q-001", client_id))
        assert quote.status_code == 201
        quote_id = quote.json()["id"]

        invoice = await api_client.post(f"{API}/invoices/", json=document("F-001", client_id, quote_id=quote_id))
        assert invoice.status_code == 201
        invoice_id = invoice.json()["id"]

        detail = (await api_client.get(f"{API}/quotes/{quote_id}")).json()
        assert detail["invoice_id"] == invoice_id
        assert detail["status"] == "Brouillon"
        assert detail["client_name"] == "Atelier Dupont"

        again = await api_client.post(f"{API}/invoices/", json=document("F-002", client_id, quote_id=quote_id))
        assert again.status_code == 409
        assert again.json()["error_code"] == "CONFLICT_STATE"

    async def test_emission_payment_and_immutability(self, api_client, client_id):
        created = await api_client.post(f"{API}/invoices/", json=document("F-002", client_id))
        invoice_id = created.json()["id"]

        sent = await api_client.put(f"{API}/invoices/{invoice_id}", json={"status": "Envoyée"})
        assert sent.json() == {"success": True}
        assert await actions(api_client, invoice_id) == ["creation", "emission"]

        edit = await api_client.put(f"{API}/invoices/{invoice_id}", json={"items": ITEMS[:1]})
        assert edit.status_code == 403
        assert edit.json()["error_code"] == "FORBIDDEN"
        assert edit.json()["extra"] == {"fields": ["items"]}

        paid = await api_client.put(
            f"{API}/invoices/{invoice_id}",
            json={"status": "Payée", "payment_method": "virement"},
            headers={"X-Actor": "comptable"},
        )
        assert paid.status_code == 200
        events = (await api_client.get(f"{API}/invoices/{invoice_id}/events")).json()
        assert [e["action"] for e in events] == ["creation", "emission", "paiement"]
        assert events[-1]["user"] == "comptable"

        deleted = await api_client.delete(f"{API}/invoices/{invoice_id}")
        assert deleted.status_code == 403

        detail = (await api_client.get(f"{API}/invoices/{invoice_id}")).json()
        assert detail["status"] == "Payée"
        assert len(detail["items"]) == 2
        assert detail["items"][1]["prestation_id"] == 7
        assert detail["statut_transmission"] == "Non transmis"

    async def test_numeric_items_returned_unchanged(self, api_client, client_id):
        """Test righe con numeri JSON restituite identiche a quelle inviate."""
        raw_items = [{"description": "Conseil", "quantity": 2, "unit_price": 50.5}]
        payload = document("F-004", client_id, items=raw_items, total_ht=101, total_tva=0, total_ttc=101)

        invoice_id = (await api_client.post(f"{API}/invoices/", json=payload)).json()["id"]
        quote_id = (await api_client.post(f"{API}/quotes/", json={**payload, "number": "Q-004"})).json()["id"]

        assert (await api_client.get(f"{API}/invoices/{invoice_id}")).json()["items"] == raw_items
        assert (await api_client.get(f"{API}/quotes/{quote_id}")).json()["items"] == raw_items

    async def test_issued_invoice_rejects_resent_items_and_totals(self, api_client, client_id):
        """Test righe e totali identici rifiutati dopo l'emissione."""
        raw_items = [{"description": "Conseil", "quantity": 2, "unit_price": 50.5}]
        payload = document("F-005", client_id, items=raw_items, total_ht=101, total_tva=0, total_ttc=101)
        invoice_id = (await api_client.post(f"{API}/invoices/", json=payload)).json()["id"]
        await api_client.put(f"{API}/invoices/{invoice_id}", json={"status": "Envoyée"})

        response = await api_client.put(f"{API}/invoices/{invoice_id}", json={"items": raw_items, "total_ht": 101})

        assert response.status_code == 403
        assert response.json()["extra"] == {"fields": ["items", "total_ht"]}
        assert await actions(api_client, invoice_id) == ["creation", "emission"]

    async def test_same_sent_at_resent(self, api_client, client_id):
        invoice_id = (await api_client.post(f"{API}/invoices/", json=document("F-006", client_id))).json()["id"]
        sent = {"status": "Envoyée", "sent_at": "2024-01-01T10:00:00+00:00"}
        await api_client.put(f"{API}/invoices/{invoice_id}", json=sent)

        again = await api_client.put(f"{API}/invoices/{invoice_id}", json={"sent_at": "2024-01-01T10:00:00+00:00"})

        assert again.status_code == 200
        assert await actions(api_client, invoice_id) == ["creation", "emission"]

    async def test_delete_draft_invoice(self, api_client, client_id):
        created = await api_client.post(f"{API}/invoices/", json=document("F-003", client_id))
        invoice_id = created.json()["id"]

        deleted = await api_client.delete(f"{API}/invoices/{invoice_id}")

        assert deleted.json() == {"success": True}
        assert (await api_client.get(f"{API}/invoices/{invoice_id}")).status_code == 404
        assert await actions(api_client, invoice_id) == ["creation", "suppression"]


# ============================================================
# Errori e validazione
# ============================================================


class TestErrors:
    """Formato uniforme degli errori."""

    async def test_not_found(self, api_client):
        response = await api_client.get(f"{API}/quotes/999")

        assert response.status_code == 404
        assert response.json()["error_code"] == "RESOURCE_NOT_FOUND"

    async def test_duplicate_quote_number(self, api_client, client_id):
        await api_client.post(f"{API}/quotes/", json=document("Q-001", client_id))

        response = await api_client.post(f"{API}/quotes/", json=document("Q-001", client_id))

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_RESOURCE"

    async def test_unknown_status_rejected(self, api_client, client_id):
        created = await api_client.post(f"{API}/quotes/", json=document("Q-001", client_id))

        response = await api_client.put(f"{API}/quotes/{created.json()['id']}", json={"status": "Archivé"})

        assert response.status_code == 422
        assert response.json()["error_code"] == "REQUEST_VALIDATION_ERROR"

    async def test_negative_quantity_rejected(self, api_client, client_id):
        bad_items = [{"description": "x", "quantity": "-1", "unit_price": "10"}]

        response = await api_client.post(f"{API}/invoices/", json=document("F-009", client_id, items=bad_items))

        assert response.status_code == 422

    async def test_delete_invoiced_quote_forbidden(self, api_client, client_id):
        quote_id = (await api_client.post(f"{API}/quotes/", json=document("Q-001", client_id))).json()["id"]
        await api_client.post(f"{API}/invoices/", json=document("F-001", client_id, quote_id=quote_id))

        response = await api_client.delete(f"{API}/quotes/{quote_id}")

        assert response.status_code == 403

    async def test_client_with_documents_not_deletable(self, api_client, client_id):
        await api_client.post(f"{API}/quotes/", json=document("Q-001", client_id))

        response = await api_client.delete(f"{API}/clients/{client_id}")

        assert response.status_code == 409


# ============================================================
# Risorse di supporto
# ============================================================


class TestSupportResources:
    """Clienti, catalogo, spese, impostazioni."""

    async def test_list_filters(self, api_client, client_id):
        for number in ("F-001", "F-002"):
            await api_client.post(f"{API}/invoices/", json=document(number, client_id))
        await api_client.put(f"{API}/invoices/1", json={"status": "Envoyée"})

        listing = (await api_client.get(f"{API}/invoices/")).json()
        sent = (await api_client.get(f"{API}/invoices/", params={"status": "Envoyée"})).json()

        assert [i["number"] for i in listing] == ["F-002", "F-001"]
        assert [i["number"] for i in sent] == ["F-001"]

    async def test_prestations(self, api_client):
        created = await api_client.post(
            f"{API}/prestations/",
            json={"name": "Formation", "unit_price": "450", "type": "service", "tva_rate": "20"},
        )
        assert created.status_code == 201

        listing = (await api_client.get(f"{API}/prestations/")).json()
        assert [p["name"] for p in listing] == ["Formation"]

    async def test_expense_crud(self, api_client):
        created = await api_client.post(
            f"{API}/expenses/",
            json={"description": "Train Paris", "amount_ht": "80.00", "type": "achat"},
        )
        expense_id = created.json()["id"]

        await api_client.put(f"{API}/expenses/{expense_id}", json={"category": "Déplacements"})
        detail = (await api_client.get(f"{API}/expenses/{expense_id}")).json()
        assert detail["category"] == "Déplacements"
        assert detail["type"] == "achat"

        assert (await api_client.delete(f"{API}/expenses/{expense_id}")).json() == {"success": True}
        assert (await api_client.get(f"{API}/expenses/")).json() == []

    async def test_settings_store(self, api_client):
        saved = await api_client.post(f"{API}/settings/", json={"company_name": "Compta SARL", "vat": 20})
        assert saved.json() == {"success": True}

        assert (await api_client.get(f"{API}/settings/")).json() == {"company_name": "Compta SARL", "vat": 20}

    async def test_health(self, api_client):
        response = await api_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
