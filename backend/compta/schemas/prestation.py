"""
Schemas Pydantic per il catalogo prestazioni
Progetto: Compta Manager
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PrestationType(str, Enum):
    """Natura della prestazione."""
    SERVICE = "service"
    SALE = "vente"


class PrestationCreate(BaseModel):
    """Schema per la creazione di una voce di catalogo."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    unit_price: Optional[Decimal] = Field(None, ge=0)
    type: Optional[PrestationType] = None
    tva_rate: Optional[Decimal] = Field(None, ge=0, le=100)


class PrestationRead(PrestationCreate):
    """Schema per la lettura di una voce di catalogo."""

    id: int

    model_config = ConfigDict(from_attributes=True)
