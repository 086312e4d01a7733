"""
Modello SQLAlchemy per le Spese
Progetto: Compta Manager
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from compta.models import Base
from compta.models.mixins import IntegerIDMixin, TimestampMixin


class Expense(Base, IntegerIDMixin, TimestampMixin):
    """
    Spesa o acquisto registrato, con eventuale ricevuta allegata.

    receipt_path è un riferimento opaco restituito dall'AttachmentService.
    """

    __tablename__ = "expenses"

    date: Mapped[Optional[datetime.date]] = mapped_column(Date, nullable=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    amount_ht: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    amount_tva: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    receipt_path: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    client_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("clients.id", ondelete="SET NULL"),
        nullable=True,
        doc="Associazione opzionale a un cliente",
    )

    supplier_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    invoice_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    payment_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="frais",
        doc="Tipo: 'frais' o 'achat'",
    )
