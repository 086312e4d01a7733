"""
Schemas Pydantic per l'entità Client
Progetto: Compta Manager
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class ClientTypology(str, Enum):
    """Tipologia del cliente."""
    INDIVIDUAL = "particulier"
    PROFESSIONAL = "professionnel"


def _blank_to_none(v):
    """I campi testuali vuoti inviati dal frontend valgono come assenti."""
    if isinstance(v, str) and not v.strip():
        return None
    return v


class ClientBase(BaseModel):
    """Campi comuni dell'anagrafica cliente."""

    email: Optional[EmailStr] = None
    address: Optional[str] = None
    siret: Optional[str] = Field(None, max_length=20)
    tva_intracom: Optional[str] = Field(None, max_length=20)
    country: Optional[str] = Field(None, max_length=100)

    @field_validator("email", "address", "siret", "tva_intracom", "country", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return _blank_to_none(v)

    @field_validator("siret")
    @classmethod
    def normalize_siret(cls, v: Optional[str]) -> Optional[str]:
        """Rimuove gli spazi dal SIRET e verifica che sia numerico."""
        if v is None:
            return v
        normalized = v.replace(" ", "")
        if not normalized.isdigit():
            raise ValueError("Il SIRET deve contenere solo cifre")
        return normalized


class ClientCreate(ClientBase):
    """Schema per la creazione di un cliente."""

    name: str = Field(..., min_length=1, max_length=255)
    typology: ClientTypology = ClientTypology.INDIVIDUAL


class ClientUpdate(ClientBase):
    """Schema per l'aggiornamento parziale di un cliente."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    typology: Optional[ClientTypology] = None


class ClientRead(BaseModel):
    """Schema per la lettura di un cliente."""

    id: int
    name: str
    email: Optional[str] = None
    address: Optional[str] = None
    siret: Optional[str] = None
    typology: ClientTypology
    tva_intracom: Optional[str] = None
    country: Optional[str] = None
    created_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)
