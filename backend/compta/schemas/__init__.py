"""
Schemas Pydantic per il progetto Compta Manager

Questo modulo contiene tutti gli schemi Pydantic utilizzati per la validazione
e serializzazione delle richieste e risposte API.
"""

from compta.schemas.common import IdResponse, SuccessResponse
from compta.schemas.line_item import DocumentTotals, LineItem
from compta.schemas.client import ClientCreate, ClientRead, ClientTypology, ClientUpdate
from compta.schemas.prestation import PrestationCreate, PrestationRead, PrestationType
from compta.schemas.quote import QuoteCreate, QuoteRead, QuoteStatus, QuoteUpdate
from compta.schemas.invoice import (
    InvoiceAction,
    InvoiceCreate,
    InvoiceEventRead,
    InvoiceRead,
    InvoiceStatus,
    InvoiceUpdate,
    TransmissionStatus,
)
from compta.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseType, ExpenseUpdate

__all__ = [
    "IdResponse",
    "SuccessResponse",
    "DocumentTotals",
    "LineItem",
    "ClientCreate",
    "ClientRead",
    "ClientTypology",
    "ClientUpdate",
    "PrestationCreate",
    "PrestationRead",
    "PrestationType",
    "QuoteCreate",
    "QuoteRead",
    "QuoteStatus",
    "QuoteUpdate",
    "InvoiceAction",
    "InvoiceCreate",
    "InvoiceEventRead",
    "InvoiceRead",
    "InvoiceStatus",
    "InvoiceUpdate",
    "TransmissionStatus",
    "ExpenseCreate",
    "ExpenseRead",
    "ExpenseType",
    "ExpenseUpdate",
]
