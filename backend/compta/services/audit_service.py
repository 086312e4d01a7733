"""
Service Layer per il Journal di audit delle fatture
Progetto: Compta Manager

Il journal è append-only: questo service espone solo l'aggiunta e la lettura.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.config import settings
from compta.models import Invoice, InvoiceEvent
from compta.schemas.invoice import InvoiceAction

# Logger per questo modulo
logger = logging.getLogger(__name__)


class AuditService:
    """
    Service per il journal di audit.

    record() aggiunge l'evento alla sessione del chiamante senza fare commit:
    l'evento viene scritto nella stessa transazione della mutazione che
    documenta, oppure non viene scritto affatto.
    """

    def record(
        self,
        db: AsyncSession,
        invoice: Invoice,
        action: InvoiceAction,
        actor: Optional[str] = None,
    ) -> InvoiceEvent:
        """
        Accoda un evento per la fattura indicata.

        La fattura deve avere già un id (flush eseguito dal chiamante).

        Args:
            db: Sessione database della mutazione in corso
            invoice: Fattura a cui si riferisce l'evento
            action: Azione da registrare
            actor: Attore (default: settings.audit_default_actor)

        Returns:
            InvoiceEvent: L'evento aggiunto alla sessione
        """
        event = InvoiceEvent(
            invoice_id=invoice.id,
            invoice_number=invoice.number,
            action=action.value,
            user=actor or settings.audit_default_actor,
        )
        db.add(event)
        logger.debug("Evento %s accodato per fattura %s", action.value, invoice.number)
        return event

    async def list_for_invoice(
        self,
        db: AsyncSession,
        invoice_id: int,
    ) -> list[InvoiceEvent]:
        """
        Restituisce gli eventi di una fattura in ordine cronologico.

        Funziona anche per fatture eliminate (nessuna foreign key sul journal).
        """
        stmt = (
            select(InvoiceEvent)
            .where(InvoiceEvent.invoice_id == invoice_id)
            .order_by(InvoiceEvent.date.asc(), InvoiceEvent.id.asc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())
