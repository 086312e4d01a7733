"""
Tests for the document line-item model and totals verification.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from compta.core.exceptions import BusinessValidationError
from compta.schemas.line_item import LineItem, dump_items, verify_totals
from compta.services.document_fields import changed_values, supplied_values, verify_document_totals
from compta.schemas.invoice import InvoiceStatus, InvoiceUpdate


# ============================================================
# Tests for LineItem
# ============================================================


class TestLineItem:
    """Validazione delle righe."""

    def test_negative_quantity_rejected(self):
        with pytest.raises(PydanticValidationError):
            LineItem(quantity=Decimal("-1"), unit_price=Decimal("10"))

    def test_tax_rate_above_100_rejected(self):
        with pytest.raises(PydanticValidationError):
            LineItem(quantity=1, unit_price=10, tax_rate=120)

    def test_extra_keys_kept(self):
        """Test chiavi aggiuntive del frontend conservate nel dump."""
        item = LineItem(quantity=1, unit_price=10, unit="h")

        dumped = dump_items([item])

        assert dumped[0]["unit"] == "h"
        assert dumped[0]["unit_price"] == 10

    def test_dump_keeps_decimal_digits(self):
        item = LineItem(quantity=Decimal("1.5"), unit_price=Decimal("33.33"))

        assert dump_items([item])[0]["unit_price"] == "33.33"

    def test_json_numbers_stored_as_sent(self):
        """Test numeri JSON conservati senza chiavi aggiunte."""
        raw = {"description": "Conseil", "quantity": 2, "unit_price": 50.5}

        item = LineItem.model_validate(raw)

        assert item.unit_price == Decimal("50.5")
        assert dump_items([item]) == [raw]


# ============================================================
# Tests for totals verification
# ============================================================


class TestVerifyTotals:
    """Coerenza dei totali con le righe."""

    def test_consistent(self, sample_items):
        verify_totals(sample_items, Decimal("200.00"), Decimal("40.00"), Decimal("240.00"))

    def test_rounding_tolerance(self, sample_items):
        """Test scarto di un centesimo tollerato."""
        verify_totals(sample_items, Decimal("200.01"), Decimal("40.00"), Decimal("240.01"))

    def test_wrong_ht(self, sample_items):
        with pytest.raises(BusinessValidationError) as exc_info:
            verify_totals(sample_items, Decimal("180.00"), Decimal("36.00"), Decimal("216.00"))

        assert exc_info.value.extra == {"expected_total_ht": "200.00"}

    def test_wrong_ttc(self, sample_items):
        with pytest.raises(BusinessValidationError):
            verify_totals(sample_items, Decimal("200.00"), Decimal("40.00"), Decimal("250.00"))

    def test_empty_document(self):
        verify_totals([], Decimal("0"), Decimal("0"), Decimal("0"))


# ============================================================
# Tests for partial update helpers
# ============================================================


class FakeInvoice:
    """Oggetto con gli attributi letti dagli helper."""
    def __init__(self, **kwargs):
        self.status = kwargs.get("status", "Brouillon")
        self.items = kwargs.get("items", [])
        self.total_ht = kwargs.get("total_ht", Decimal("0"))
        self.total_tva = kwargs.get("total_tva", Decimal("0"))
        self.total_ttc = kwargs.get("total_ttc", Decimal("0"))
        self.payment_method = kwargs.get("payment_method", None)
        self.sent_at = kwargs.get("sent_at", None)


class TestDocumentFields:
    """Traduzione degli schemi di aggiornamento in valori di colonna."""

    def test_only_supplied_non_null_fields(self):
        data = InvoiceUpdate(status=InvoiceStatus.SENT, payment_method=None)

        assert supplied_values(data) == {"status": "Envoyée"}

    def test_changed_values_ignores_equal_decimals(self):
        invoice = FakeInvoice(total_ht=Decimal("200.00"))

        assert changed_values(invoice, {"total_ht": Decimal("200"), "payment_method": "chèque"}) == {
            "payment_method": "chèque"
        }

    def test_verify_document_totals_merges_current_state(self, sample_items):
        """Test verifica sui totali risultanti, non solo su quelli inviati."""
        invoice = FakeInvoice(
            items=dump_items(sample_items),
            total_ht=Decimal("200.00"),
            total_tva=Decimal("40.00"),
            total_ttc=Decimal("240.00"),
        )

        verify_document_totals(invoice, {"total_tva": Decimal("40.00")})
        with pytest.raises(BusinessValidationError):
            verify_document_totals(invoice, {"total_ht": Decimal("10.00")})

    def test_naive_stored_datetime_read_as_utc(self):
        """Test datetime naive restituito da SQLite confrontato come UTC."""
        invoice = FakeInvoice(sent_at=datetime(2024, 1, 1, 10, 0))
        supplied = supplied_values(
            InvoiceUpdate(sent_at=datetime(2024, 1, 1, 11, 0, tzinfo=timezone(timedelta(hours=1))))
        )

        assert supplied["sent_at"] == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        assert changed_values(invoice, supplied) == {}

    def test_different_datetime_is_a_change(self):
        invoice = FakeInvoice(sent_at=datetime(2024, 1, 1, 10, 0))

        changes = changed_values(invoice, {"sent_at": datetime(2024, 1, 2, 10, 0, tzinfo=timezone.utc)})

        assert list(changes) == ["sent_at"]
