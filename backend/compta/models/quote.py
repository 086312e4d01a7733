"""
Modello SQLAlchemy per i Preventivi (devis)
Progetto: Compta Manager
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import JSON, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from compta.models import Base
from compta.models.mixins import IntegerIDMixin, TimestampMixin

if TYPE_CHECKING:
    from compta.models.client import Client


class Quote(Base, IntegerIDMixin, TimestampMixin):
    """
    Modello per i preventivi.

    Un preventivo può essere convertito in al massimo una fattura.
    Il riferimento inverso invoice_id è valorizzato dal service fatture
    nella stessa transazione che crea (o elimina) la fattura; l'unicità
    autoritativa è garantita dal vincolo UNIQUE su invoices.quote_id.

    Attributes:
        number: Numero preventivo univoco, assegnato dal chiamante
        client_id: Cliente destinatario
        object: Oggetto del preventivo
        date: Data emissione
        expiry_date: Data di validità
        status: Stato (Brouillon, Envoyé, Accepté, Refusé)
        items: Righe (lista JSON ordinata)
        total_ht / total_tva / total_ttc: Totali forniti dal chiamante
        sent_at / accepted_at / refused_at: Timestamp degli eventi
        invoice_id: Fattura generata dalla conversione (NULL se non convertito)
    """

    __tablename__ = "quotes"

    number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        doc="Numero preventivo univoco (immutabile una volta assegnato)",
    )

    client_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("clients.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    object: Mapped[str] = mapped_column(Text, nullable=False)

    date: Mapped[Optional[datetime.date]] = mapped_column(Date, nullable=True)

    expiry_date: Mapped[Optional[datetime.date]] = mapped_column(Date, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="Brouillon",
        doc="Stato: Brouillon, Envoyé, Accepté, Refusé",
    )

    items: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Righe del preventivo, nell'ordine di visualizzazione",
    )

    total_ht: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    total_tva: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    total_ttc: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))

    sent_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    accepted_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    refused_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    invoice_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        unique=True,
        doc="Fattura generata da questo preventivo",
    )

    # ------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------
    client: Mapped[Optional["Client"]] = relationship(
        "Client",
        back_populates="quotes",
        lazy="selectin",
    )

    @property
    def client_name(self) -> Optional[str]:
        """Nome del cliente (None se non associato)."""
        return self.client.name if self.client is not None else None

    def __repr__(self) -> str:
        return f"<Quote(id={self.id}, number='{self.number}', status='{self.status}')>"
