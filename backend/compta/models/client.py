"""
Modello SQLAlchemy per l'entità Client
Progetto: Compta Manager

Rappresenta l'anagrafica dei clienti (privati e professionisti).
"""


from __future__ import annotations
from typing import Optional, TYPE_CHECKING, List

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from compta.models import Base
from compta.models.mixins import IntegerIDMixin, TimestampMixin

# Import per type hinting relazioni (evita circular import)
if TYPE_CHECKING:
    from compta.models.invoice import Invoice
    from compta.models.quote import Quote


class Client(Base, IntegerIDMixin, TimestampMixin):
    """
    Modello per l'anagrafica clienti.

    Nessun ciclo di vita oltre a create/update/delete. L'eliminazione di un
    cliente ancora referenziato da preventivi o fatture è bloccata dalla
    foreign key (RESTRICT), così i dati fiscali dei documenti emessi restano validi.

    Attributes:
        id: Primary key
        name: Nome o ragione sociale (obbligatorio)
        email: Indirizzo email
        address: Indirizzo completo
        siret: Identificativo fiscale (SIRET)
        typology: 'particulier' o 'professionnel'
        tva_intracom: Numero di partita IVA intracomunitaria
        country: Paese
    """

    __tablename__ = "clients"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="Nome o ragione sociale",
    )

    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    siret: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        doc="Identificativo fiscale (SIRET, 14 cifre)",
    )

    typology: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="particulier",
        doc="Tipologia cliente: 'particulier' o 'professionnel'",
    )

    tva_intracom: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        doc="Partita IVA intracomunitaria",
    )

    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # ------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------
    quotes: Mapped[List["Quote"]] = relationship(
        "Quote",
        back_populates="client",
        passive_deletes="all",
    )

    invoices: Mapped[List["Invoice"]] = relationship(
        "Invoice",
        back_populates="client",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.name}')>"
