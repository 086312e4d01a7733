"""
Schemas Pydantic per i Preventivi
Progetto: Compta Manager

Contiene:
- Enum: QuoteStatus
- Schemas per Quote (create, update, read)
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from compta.core.exceptions import BusinessValidationError
from compta.schemas.line_item import DocumentTotals, LineItem


# -------------------------------------------------------------------
# Enum
# -------------------------------------------------------------------

class QuoteStatus(str, Enum):
    """Stati del preventivo: Brouillon → Envoyé → {Accepté, Refusé}."""
    DRAFT = "Brouillon"
    SENT = "Envoyé"
    ACCEPTED = "Accepté"
    REFUSED = "Refusé"


# -------------------------------------------------------------------
# Schemas per Quote
# -------------------------------------------------------------------

class QuoteCreate(DocumentTotals):
    """
    Schema per la creazione di un preventivo.

    Lo stato iniziale è sempre Brouillon e invoice_id è NULL:
    entrambi non sono accettati in input.
    """

    number: str = Field(..., min_length=1, max_length=50, description="Numero preventivo univoco")
    client_id: Optional[int] = Field(None, description="ID del cliente")
    object: str = Field(..., min_length=1, description="Oggetto del preventivo")
    date: Optional[datetime.date] = Field(None, description="Data emissione")
    expiry_date: Optional[datetime.date] = Field(None, description="Data di validità")
    items: list[LineItem] = Field(default_factory=list, description="Righe del preventivo")

    @model_validator(mode="after")
    def validate_dates(self) -> "QuoteCreate":
        """Valida che expiry_date >= date."""
        if self.date and self.expiry_date and self.expiry_date < self.date:
            raise BusinessValidationError(
                "La data di validità non può essere precedente alla data del preventivo"
            )
        return self


class QuoteUpdate(BaseModel):
    """
    Schema per l'aggiornamento parziale di un preventivo.

    I campi omessi (o null) restano invariati. Il numero non è modificabile.
    """

    status: Optional[QuoteStatus] = None
    sent_at: Optional[datetime.datetime] = None
    accepted_at: Optional[datetime.datetime] = None
    refused_at: Optional[datetime.datetime] = None
    object: Optional[str] = Field(None, min_length=1)
    items: Optional[list[LineItem]] = None
    total_ht: Optional[Decimal] = None
    total_tva: Optional[Decimal] = None
    total_ttc: Optional[Decimal] = None
    date: Optional[datetime.date] = None
    expiry_date: Optional[datetime.date] = None
    client_id: Optional[int] = None


class QuoteRead(DocumentTotals):
    """Schema per la lettura di un preventivo."""

    id: int
    number: str
    client_id: Optional[int] = None
    client_name: Optional[str] = None
    object: str
    date: Optional[datetime.date] = None
    expiry_date: Optional[datetime.date] = None
    status: QuoteStatus
    items: list[dict[str, Any]] = Field(default_factory=list, description="Righe come memorizzate")
    sent_at: Optional[datetime.datetime] = None
    accepted_at: Optional[datetime.datetime] = None
    refused_at: Optional[datetime.datetime] = None
    invoice_id: Optional[int] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)
