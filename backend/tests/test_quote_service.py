"""
Tests for QuoteService.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from compta.core.config import Settings
from compta.core.exceptions import (
    BusinessValidationError,
    DuplicateError,
    ForbiddenError,
    NotFoundError,
)
from compta.schemas.quote import QuoteStatus, QuoteUpdate
from compta.services.invoice_service import InvoiceService
from compta.services.quote_service import QuoteService


@pytest.fixture
def service() -> QuoteService:
    return QuoteService()


# ============================================================
# Creazione
# ============================================================


class TestCreateQuote:
    """Tests per la creazione dei preventivi."""

    async def test_create_draft(self, db_session, service, make_quote_data):
        """Test nuovo preventivo in Brouillon, senza fattura."""
        quote = await service.create(db_session, make_quote_data("D-001"))

        assert quote.id is not None
        assert quote.status == QuoteStatus.DRAFT.value
        assert quote.invoice_id is None

    async def test_duplicate_number(self, db_session, service, make_quote_data):
        await service.create(db_session, make_quote_data("D-001"))

        with pytest.raises(DuplicateError):
            await service.create(db_session, make_quote_data("D-001"))

    async def test_unknown_client(self, db_session, service, make_quote_data):
        with pytest.raises(NotFoundError):
            await service.create(db_session, make_quote_data("D-001", client_id=999))

    def test_expiry_before_date_rejected(self, make_quote_data):
        """Test data di validità precedente alla data del preventivo."""
        with pytest.raises(PydanticValidationError):
            make_quote_data("D-001", date="2024-03-10", expiry_date="2024-03-01")

    async def test_inconsistent_totals_when_verification_enabled(
        self, db_session, service, make_quote_data, monkeypatch
    ):
        """Test totali incoerenti rifiutati se la verifica è attiva."""
        monkeypatch.setattr(
            "compta.services.quote_service.settings",
            Settings(verify_document_totals=True),
        )

        with pytest.raises(BusinessValidationError):
            await service.create(db_session, make_quote_data("D-001", total_ht=Decimal("150.00")))

    async def test_inconsistent_totals_stored_as_given_by_default(self, db_session, service, make_quote_data):
        quote = await service.create(db_session, make_quote_data("D-001", total_ht=Decimal("150.00")))

        reloaded = await service.get_by_id(db_session, quote.id)
        assert reloaded.total_ht == Decimal("150.00")


# ============================================================
# Aggiornamento e lettura
# ============================================================


class TestUpdateQuote:
    """Tests per l'aggiornamento parziale."""

    async def test_partial_update_keeps_other_fields(self, db_session, service, make_quote_data):
        quote = await service.create(db_session, make_quote_data("D-001"))

        await service.update(db_session, quote.id, QuoteUpdate(status=QuoteStatus.SENT))

        reloaded = await service.get_by_id(db_session, quote.id)
        assert reloaded.status == "Envoyé"
        assert reloaded.object == "Mission de conseil"
        assert reloaded.total_ttc == Decimal("240.00")

    async def test_any_status_order_accepted(self, db_session, service, make_quote_data):
        """Test nessun controllo sulla legalità della transizione."""
        quote = await service.create(db_session, make_quote_data("D-001"))
        await service.update(db_session, quote.id, QuoteUpdate(status=QuoteStatus.REFUSED))

        await service.update(db_session, quote.id, QuoteUpdate(status=QuoteStatus.DRAFT))

        assert (await service.get_by_id(db_session, quote.id)).status == "Brouillon"

    def test_unknown_status_rejected(self):
        with pytest.raises(PydanticValidationError):
            QuoteUpdate(status="Archivé")

    async def test_update_missing(self, db_session, service):
        with pytest.raises(NotFoundError):
            await service.update(db_session, 404, QuoteUpdate(object="x"))

    async def test_filters(self, db_session, service, make_quote_data, client_row):
        await service.create(db_session, make_quote_data("D-001"))
        second = await service.create(db_session, make_quote_data("D-002"))
        await service.update(db_session, second.id, QuoteUpdate(status=QuoteStatus.ACCEPTED))
        db_session.expunge_all()

        everything = await service.get_all(db_session)
        accepted = await service.get_all(db_session, status_filter=QuoteStatus.ACCEPTED)

        assert [q.number for q in everything] == ["D-002", "D-001"]
        assert [q.number for q in accepted] == ["D-002"]
        assert accepted[0].client_name == client_row.name


# ============================================================
# Eliminazione
# ============================================================


class TestDeleteQuote:
    """Tests per l'eliminazione."""

    async def test_delete(self, db_session, service, make_quote_data):
        quote = await service.create(db_session, make_quote_data("D-001"))

        await service.delete(db_session, quote.id)

        with pytest.raises(NotFoundError):
            await service.get_by_id(db_session, quote.id)

    async def test_delete_invoiced_quote_forbidden(
        self, db_session, service, make_quote_data, make_invoice_data
    ):
        """Test preventivo già fatturato non eliminabile."""
        quote = await service.create(db_session, make_quote_data("D-001"))
        invoice = await InvoiceService().create(db_session, make_invoice_data("F-001", quote_id=quote.id))

        with pytest.raises(ForbiddenError) as exc_info:
            await service.delete(db_session, quote.id)

        assert exc_info.value.extra == {"invoice_id": invoice.id}
        assert (await service.get_by_id(db_session, quote.id)).number == "D-001"
