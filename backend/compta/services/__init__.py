"""
Service Layer
Progetto: Compta Manager

Logica di business indipendente da FastAPI.
"""

from compta.services.attachment_service import AttachmentService
from compta.services.audit_service import AuditService
from compta.services.client_service import ClientService
from compta.services.expense_service import ExpenseService
from compta.services.invoice_service import InvoiceService
from compta.services.prestation_service import PrestationService
from compta.services.quote_service import QuoteService
from compta.services.settings_service import SettingsService

__all__ = [
    "AttachmentService",
    "AuditService",
    "ClientService",
    "ExpenseService",
    "InvoiceService",
    "PrestationService",
    "QuoteService",
    "SettingsService",
]
