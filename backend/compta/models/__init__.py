"""
Modelli Database SQLAlchemy
Progetto: Compta Manager

Import centralizzato di tutti i modelli per create_all e usage generico.

- Client: Anagrafica clienti
- Prestation: Catalogo prestazioni/articoli
- Quote: Preventivi (devis)
- Invoice: Fatture (factures)
- InvoiceEvent: Journal append-only del ciclo di vita fatture
- Expense: Spese e acquisti con ricevuta
- Setting: Impostazioni chiave/valore
"""

# SQLAlchemy 2.0 Base declarativa
# Importato qui per essere disponibile per tutti i modelli
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class per tutti i modelli SQLAlchemy."""
    pass


from compta.models.client import Client
from compta.models.prestation import Prestation
from compta.models.quote import Quote
from compta.models.invoice import Invoice, InvoiceEvent
from compta.models.expense import Expense
from compta.models.setting import Setting

__all__ = [
    "Base",
    "Client",
    "Prestation",
    "Quote",
    "Invoice",
    "InvoiceEvent",
    "Expense",
    "Setting",
]
