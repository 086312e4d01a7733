"""
Modello SQLAlchemy per le Impostazioni
Progetto: Compta Manager
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from compta.models import Base


class Setting(Base):
    """
    Coppia chiave/valore della configurazione del tenant.

    value contiene il valore serializzato in JSON.
    """

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)

    value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
