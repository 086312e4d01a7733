"""
Modello SQLAlchemy per il catalogo prestazioni
Progetto: Compta Manager
"""


from __future__ import annotations
from decimal import Decimal
from typing import Optional

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from compta.models import Base
from compta.models.mixins import IntegerIDMixin, TimestampMixin


class Prestation(Base, IntegerIDMixin, TimestampMixin):
    """
    Voce di catalogo (servizio o vendita) usata per precompilare le righe.

    Attributes:
        name: Nome della prestazione
        description: Descrizione estesa
        unit_price: Prezzo unitario HT
        type: 'service' o 'vente'
        tva_rate: Aliquota TVA in percentuale
    """

    __tablename__ = "prestations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    unit_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)

    type: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        doc="Tipo: 'service' o 'vente'",
    )

    tva_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2), nullable=True)
