"""
Schemas Pydantic per la Fatturazione
Progetto: Compta Manager

Contiene:
- Enums: InvoiceStatus, TransmissionStatus, InvoiceAction
- Schemas per Invoice (create, update, read)
- Schemas per InvoiceEvent
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from compta.schemas.line_item import DocumentTotals, LineItem


# -------------------------------------------------------------------
# Enum
# -------------------------------------------------------------------

class InvoiceStatus(str, Enum):
    """Asse primario della fattura: Brouillon → Envoyée → Payée."""
    DRAFT = "Brouillon"
    SENT = "Envoyée"
    PAID = "Payée"


class TransmissionStatus(str, Enum):
    """Asse di trasmissione e-invoicing, indipendente dallo stato primario."""
    NOT_TRANSMITTED = "Non transmis"
    TRANSMITTED = "Transmis"
    REJECTED = "Rejetée"


class InvoiceAction(str, Enum):
    """Azioni registrate nel journal di audit."""
    CREATION = "creation"
    MODIFICATION = "modification"
    EMISSION = "emission"
    PAYMENT = "paiement"
    DELETION = "suppression"


# Ordine dell'asse primario: le transizioni possono solo avanzare
INVOICE_STATUS_RANK = {
    InvoiceStatus.DRAFT: 0,
    InvoiceStatus.SENT: 1,
    InvoiceStatus.PAID: 2,
}


# -------------------------------------------------------------------
# Schemas per Invoice
# -------------------------------------------------------------------

class InvoiceCreate(DocumentTotals):
    """Schema per la creazione di una fattura (eventualmente da preventivo)."""

    number: str = Field(..., min_length=1, max_length=50, description="Numero fattura univoco")
    quote_id: Optional[int] = Field(None, description="Preventivo di origine")
    client_id: Optional[int] = Field(None, description="ID del cliente")
    object: str = Field(..., min_length=1, description="Oggetto della fattura")
    date: Optional[datetime.date] = Field(None, description="Data emissione")
    status: InvoiceStatus = Field(default=InvoiceStatus.DRAFT, description="Stato iniziale")
    items: list[LineItem] = Field(default_factory=list, description="Righe della fattura")

    sent_at: Optional[datetime.datetime] = None
    paid_at: Optional[datetime.datetime] = None
    payment_method: Optional[str] = Field(None, max_length=50)

    type_operation: Optional[str] = Field(None, max_length=50)
    nature_operation: Optional[str] = Field(None, max_length=50)
    pays_client: Optional[str] = Field(None, max_length=100)
    date_encaissement: Optional[datetime.date] = None

    statut_transmission: TransmissionStatus = TransmissionStatus.NOT_TRANSMITTED
    date_transmission: Optional[datetime.date] = None
    reference_pdp: Optional[str] = Field(None, max_length=255)


class InvoiceUpdate(BaseModel):
    """
    Schema per l'aggiornamento parziale di una fattura.

    I campi omessi (o null) restano invariati. Su una fattura non più in
    bozza, number, client_id, items e totali non possono cambiare.
    """

    number: Optional[str] = Field(None, min_length=1, max_length=50)
    status: Optional[InvoiceStatus] = None
    sent_at: Optional[datetime.datetime] = None
    paid_at: Optional[datetime.datetime] = None
    payment_method: Optional[str] = Field(None, max_length=50)
    object: Optional[str] = Field(None, min_length=1)
    items: Optional[list[LineItem]] = None
    total_ht: Optional[Decimal] = None
    total_tva: Optional[Decimal] = None
    total_ttc: Optional[Decimal] = None
    date: Optional[datetime.date] = None
    client_id: Optional[int] = None

    type_operation: Optional[str] = Field(None, max_length=50)
    nature_operation: Optional[str] = Field(None, max_length=50)
    pays_client: Optional[str] = Field(None, max_length=100)
    date_encaissement: Optional[datetime.date] = None

    statut_transmission: Optional[TransmissionStatus] = None
    date_transmission: Optional[datetime.date] = None
    reference_pdp: Optional[str] = Field(None, max_length=255)


class InvoiceRead(DocumentTotals):
    """Schema per la lettura di una fattura."""

    id: int
    number: str
    quote_id: Optional[int] = None
    client_id: Optional[int] = None
    client_name: Optional[str] = None
    object: str
    date: Optional[datetime.date] = None
    status: InvoiceStatus
    items: list[dict[str, Any]] = Field(default_factory=list, description="Righe come memorizzate")

    sent_at: Optional[datetime.datetime] = None
    paid_at: Optional[datetime.datetime] = None
    payment_method: Optional[str] = None

    type_operation: Optional[str] = None
    nature_operation: Optional[str] = None
    pays_client: Optional[str] = None
    date_encaissement: Optional[datetime.date] = None

    statut_transmission: TransmissionStatus
    date_transmission: Optional[datetime.date] = None
    reference_pdp: Optional[str] = None

    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)


# -------------------------------------------------------------------
# Schemas per InvoiceEvent
# -------------------------------------------------------------------

class InvoiceEventRead(BaseModel):
    """Schema per la lettura di un evento del journal."""

    id: int
    invoice_id: int
    invoice_number: str
    action: InvoiceAction
    date: datetime.datetime
    user: str

    model_config = ConfigDict(from_attributes=True)
