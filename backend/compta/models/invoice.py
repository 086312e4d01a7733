"""
Modelli SQLAlchemy per la Fatturazione
Progetto: Compta Manager

Contiene:
- Invoice: Fattura principale (righe embedded come JSON)
- InvoiceEvent: Journal append-only delle azioni sul ciclo di vita
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import JSON, Date, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from compta.models import Base
from compta.models.mixins import IntegerIDMixin, TimestampMixin, utcnow

if TYPE_CHECKING:
    from compta.models.client import Client


class Invoice(Base, IntegerIDMixin, TimestampMixin):
    """
    Modello per le fatture.

    Due assi di stato indipendenti:
    - status: Brouillon → Envoyée → Payée
    - statut_transmission: trasmissione e-invoicing (Non transmis, Transmis, Rejetée)

    Una volta uscita da Brouillon, i campi fiscali (number, client_id, items,
    totali) diventano immutabili; il controllo è nel service.

    Attributes:
        number: Numero fattura univoco, assegnato dal chiamante
        quote_id: Preventivo di origine (UNIQUE: al massimo una fattura per preventivo)
        client_id: Cliente fatturato
        object: Oggetto della fattura
        date: Data emissione
        status: Stato primario
        items: Righe (lista JSON ordinata)
        total_ht / total_tva / total_ttc: Totali forniti dal chiamante
        sent_at / paid_at: Timestamp di emissione e pagamento
        payment_method: Metodo di pagamento
        type_operation / nature_operation / pays_client / date_encaissement: Metadati operazione
        statut_transmission / date_transmission / reference_pdp: Sotto-record di trasmissione
    """

    __tablename__ = "invoices"

    # ------------------------------------------------------------
    # Colonne Identificazione
    # ------------------------------------------------------------
    number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        doc="Numero fattura univoco (immutabile una volta emessa)",
    )

    quote_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("quotes.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
        doc="Preventivo di origine (vincolo UNIQUE autoritativo)",
    )

    client_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("clients.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    object: Mapped[str] = mapped_column(Text, nullable=False)

    date: Mapped[Optional[datetime.date]] = mapped_column(Date, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="Brouillon",
        doc="Stato primario: Brouillon, Envoyée, Payée",
    )

    # ------------------------------------------------------------
    # Colonne Importi
    # ------------------------------------------------------------
    items: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Righe della fattura, nell'ordine di visualizzazione",
    )

    total_ht: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    total_tva: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    total_ttc: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))

    # ------------------------------------------------------------
    # Colonne Pagamento
    # ------------------------------------------------------------
    sent_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    paid_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    payment_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # ------------------------------------------------------------
    # Colonne Operazione
    # ------------------------------------------------------------
    type_operation: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    nature_operation: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    pays_client: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    date_encaissement: Mapped[Optional[datetime.date]] = mapped_column(Date, nullable=True)

    # ------------------------------------------------------------
    # Colonne Trasmissione (e-invoicing)
    # ------------------------------------------------------------
    statut_transmission: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="Non transmis",
    )
    date_transmission: Mapped[Optional[datetime.date]] = mapped_column(Date, nullable=True)
    reference_pdp: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="Riferimento assegnato dalla piattaforma di dematerializzazione (PDP)",
    )

    # ------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------
    client: Mapped[Optional["Client"]] = relationship(
        "Client",
        back_populates="invoices",
        lazy="selectin",
    )

    @property
    def client_name(self) -> Optional[str]:
        """Nome del cliente (None se non associato)."""
        return self.client.name if self.client is not None else None

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id}, number='{self.number}', status='{self.status}')>"


class InvoiceEvent(Base, IntegerIDMixin):
    """
    Evento del journal di audit di una fattura.

    Append-only: nessun percorso del codice aggiorna o elimina le righe.
    invoice_id non ha foreign key, così lo storico sopravvive anche
    all'eliminazione di una fattura in bozza; invoice_number ne conserva il numero.

    Attributes:
        invoice_id: Fattura a cui si riferisce l'evento
        invoice_number: Numero della fattura al momento dell'evento
        action: creation, modification, emission, paiement, suppression
        date: Timestamp dell'evento
        user: Attore che ha eseguito l'azione
    """

    __tablename__ = "invoice_events"
    __table_args__ = (
        Index("ix_invoice_events_invoice_id_date", "invoice_id", "date"),
    )

    invoice_id: Mapped[int] = mapped_column(Integer, nullable=False)

    invoice_number: Mapped[str] = mapped_column(String(50), nullable=False)

    action: Mapped[str] = mapped_column(String(20), nullable=False)

    date: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    user: Mapped[str] = mapped_column(String(100), nullable=False, default="system")

    def __repr__(self) -> str:
        return f"<InvoiceEvent(invoice_id={self.invoice_id}, action='{self.action}')>"
