"""
Schemas Pydantic per le Spese
Progetto: Compta Manager
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExpenseType(str, Enum):
    """Tipo di spesa."""
    FEE = "frais"
    PURCHASE = "achat"


class ExpenseBase(BaseModel):
    """Campi comuni delle spese."""

    date: Optional[datetime.date] = None
    description: Optional[str] = None
    amount_ht: Optional[Decimal] = None
    amount_tva: Optional[Decimal] = None
    category: Optional[str] = Field(None, max_length=100)
    receipt_path: Optional[str] = Field(
        None,
        description="Riferimento all'allegato oppure data URI base64 da salvare",
    )
    client_id: Optional[int] = None
    supplier_name: Optional[str] = Field(None, max_length=255)
    invoice_number: Optional[str] = Field(None, max_length=100)
    payment_method: Optional[str] = Field(None, max_length=50)


class ExpenseCreate(ExpenseBase):
    """Schema per la creazione di una spesa."""

    type: ExpenseType = ExpenseType.FEE


class ExpenseUpdate(ExpenseBase):
    """Schema per l'aggiornamento parziale di una spesa."""

    type: Optional[ExpenseType] = None


class ExpenseRead(ExpenseBase):
    """Schema per la lettura di una spesa."""

    id: int
    type: ExpenseType
    created_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)
