"""
Service Layer per la Fatturazione
Progetto: Compta Manager

Definisce la logica di business del ciclo di vita delle fatture:
creazione (anche da preventivo), emissione, pagamento, immutabilità
dei dati fiscali dopo l'emissione e journal di audit transazionale.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.config import settings
from compta.core.exceptions import (
    ConflictError,
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    StorageError,
)
from compta.models import Invoice, InvoiceEvent, Quote
from compta.models.mixins import utcnow
from compta.schemas.invoice import (
    INVOICE_STATUS_RANK,
    InvoiceAction,
    InvoiceCreate,
    InvoiceStatus,
    InvoiceUpdate,
)
from compta.schemas.line_item import dump_items, verify_totals
from compta.services.audit_service import AuditService
from compta.services.client_service import ClientService
from compta.services.document_fields import (
    TOTAL_FIELDS,
    changed_values,
    supplied_values,
    verify_document_totals,
)

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Campi che non possono più cambiare una volta uscita dalla bozza
FISCAL_FIELDS = ("number", "client_id", "items", "total_ht", "total_tva", "total_ttc")
# Su fattura emessa basta la presenza di questi campi per rifiutare la modifica.
LOCKED_FIELDS = ("client_id", "items", "total_ht", "total_tva", "total_ttc")


class InvoiceService:
    """
    Service per la gestione delle operazioni sulle fatture.

    Fornisce metodi asincroni per interagire con il database
    in modo centralizzato, senza dipendenze da FastAPI.

    Implementa:
    - Conversione preventivo → fattura (al massimo una fattura per preventivo)
    - Macchina a stati Brouillon → Envoyée → Payée (solo in avanti)
    - Immutabilità dei campi fiscali dopo l'emissione
    - Journal di audit scritto nella stessa transazione della modifica
    """

    def __init__(
        self,
        audit_service: Optional[AuditService] = None,
        client_service: Optional[ClientService] = None,
    ) -> None:
        self.audit_service = audit_service or AuditService()
        self.client_service = client_service or ClientService()

    # ----------------------------------------------------------------
    # Lettura
    # ----------------------------------------------------------------

    async def get_all(
        self,
        db: AsyncSession,
        status_filter: Optional[InvoiceStatus] = None,
        client_id: Optional[int] = None,
    ) -> list[Invoice]:
        """Lista delle fatture in ordine di numero decrescente."""
        stmt = select(Invoice).order_by(Invoice.number.desc())
        if status_filter is not None:
            stmt = stmt.where(Invoice.status == status_filter.value)
        if client_id is not None:
            stmt = stmt.where(Invoice.client_id == client_id)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(
        self,
        db: AsyncSession,
        invoice_id: int,
        for_update: bool = False,
    ) -> Invoice:
        """
        Recupera una fattura per ID.

        Args:
            db: Sessione database
            invoice_id: ID della fattura
            for_update: Se True blocca la riga fino al termine della transazione

        Returns:
            Invoice: La fattura

        Raises:
            NotFoundError: Fattura non trovata
        """
        stmt = (
            select(Invoice)
            .where(Invoice.id == invoice_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await db.execute(stmt)
        invoice = result.scalar_one_or_none()

        if not invoice:
            raise NotFoundError(f"Fattura {invoice_id} non trovata")

        return invoice

    async def get_events(self, db: AsyncSession, invoice_id: int) -> list[InvoiceEvent]:
        """Journal della fattura in ordine cronologico."""
        return await self.audit_service.list_for_invoice(db, invoice_id)

    # ----------------------------------------------------------------
    # Creazione
    # ----------------------------------------------------------------

    async def create(
        self,
        db: AsyncSession,
        data: InvoiceCreate,
        actor: Optional[str] = None,
    ) -> Invoice:
        """
        Crea una fattura, eventualmente a partire da un preventivo.

        Steps:
        1. Verifica unicità del numero (controllo rapido)
        2. Verifica esistenza del cliente
        3. Se quote_id è presente: blocca il preventivo e verifica che non
           sia già fatturato (controllo rapido, non autoritativo)
        4. Inserisce la fattura, valorizza quote.invoice_id e registra
           l'evento 'creation'
        5. Un unico commit: il vincolo UNIQUE su invoices.quote_id è la
           garanzia autoritativa contro due conversioni concorrenti

        Raises:
            DuplicateError: Numero fattura già esistente
            ConflictError: Preventivo già fatturato
            NotFoundError: Preventivo o cliente inesistente
            BusinessValidationError: Totali incoerenti (se la verifica è attiva)
        """
        if settings.verify_document_totals:
            verify_totals(data.items, data.total_ht, data.total_tva, data.total_ttc)

        await self._ensure_number_available(db, data.number)

        if data.client_id is not None:
            await self.client_service.get_by_id(db, data.client_id)

        quote: Optional[Quote] = None
        if data.quote_id is not None:
            quote = await self._lock_quote(db, data.quote_id)
            await self._ensure_quote_not_invoiced(db, quote)

        now = utcnow()
        sent_at = data.sent_at
        paid_at = data.paid_at
        if data.status == InvoiceStatus.SENT and sent_at is None:
            sent_at = now
        if data.status == InvoiceStatus.PAID and paid_at is None:
            paid_at = now

        invoice = Invoice(
            number=data.number,
            quote_id=data.quote_id,
            client_id=data.client_id,
            object=data.object,
            date=data.date,
            status=data.status.value,
            items=dump_items(data.items),
            total_ht=data.total_ht,
            total_tva=data.total_tva,
            total_ttc=data.total_ttc,
            sent_at=sent_at,
            paid_at=paid_at,
            payment_method=data.payment_method,
            type_operation=data.type_operation,
            nature_operation=data.nature_operation,
            pays_client=data.pays_client,
            date_encaissement=data.date_encaissement,
            statut_transmission=data.statut_transmission.value,
            date_transmission=data.date_transmission,
            reference_pdp=data.reference_pdp,
        )
        db.add(invoice)

        try:
            # Il flush assegna l'id necessario al riferimento inverso e al journal
            await db.flush()
            if quote is not None:
                quote.invoice_id = invoice.id
            self.audit_service.record(db, invoice, InvoiceAction.CREATION, actor)
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.error("Errore di integrità durante creazione fattura %s: %s", data.number, e.orig)
            raise self._conflict_from_integrity_error(e, data)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Errore SQLAlchemy creazione fattura: %s - %s", e.__class__.__name__, e)
            raise StorageError("Errore del database durante la creazione della fattura")

        logger.info(
            "Creata fattura %s (id=%s, preventivo=%s)",
            invoice.number, invoice.id, data.quote_id or "N/A",
        )
        return invoice

    # ----------------------------------------------------------------
    # Aggiornamento
    # ----------------------------------------------------------------

    async def update(
        self,
        db: AsyncSession,
        invoice_id: int,
        data: InvoiceUpdate,
        actor: Optional[str] = None,
    ) -> Invoice:
        """
        Aggiornamento parziale di una fattura.

        - In bozza: tutti i campi sono modificabili.
        - Emessa o pagata: number, client_id, items e totali sono immutabili;
          stato, pagamento e trasmissione restano modificabili. Items, totali
          e client_id sono rifiutati anche se uguali ai valori memorizzati;
          number solo se diverso.
        - Lo stato primario può solo avanzare.

        Tag del journal:
        - Brouillon → Envoyée: 'emission'
        - verso Payée da uno stato diverso: 'paiement'
        - qualsiasi altra modifica: 'modification'

        Se nessun campo cambia effettivamente, non viene scritto nulla.

        Raises:
            NotFoundError: Fattura o cliente inesistente
            ForbiddenError: Modifica di campi fiscali su fattura emessa,
                oppure transizione di stato all'indietro
            DuplicateError: Nuovo numero già utilizzato
        """
        invoice = await self.get_by_id(db, invoice_id, for_update=True)
        current_status = InvoiceStatus(invoice.status)
        supplied = supplied_values(data)
        changes = changed_values(invoice, supplied)

        if current_status != InvoiceStatus.DRAFT:
            touched = [
                name
                for name in FISCAL_FIELDS
                if name in changes or (name in LOCKED_FIELDS and name in supplied)
            ]
            if touched:
                logger.warning(
                    "Modifica dei campi fiscali %s rifiutata sulla fattura emessa %s",
                    touched, invoice.number,
                )
                raise ForbiddenError(
                    "Impossibile modificare una fattura emessa. Creare un avoir.",
                    extra={"fields": touched},
                )

        new_status = InvoiceStatus(changes.get("status", current_status.value))
        if INVOICE_STATUS_RANK[new_status] < INVOICE_STATUS_RANK[current_status]:
            raise ForbiddenError(
                f"Transizione di stato non consentita: {current_status.value} → {new_status.value}"
            )

        if not changes:
            return invoice

        if "number" in changes:
            await self._ensure_number_available(db, changes["number"])

        if "client_id" in changes:
            await self.client_service.get_by_id(db, changes["client_id"])

        if settings.verify_document_totals and (
            "items" in changes or any(name in changes for name in TOTAL_FIELDS)
        ):
            verify_document_totals(invoice, changes)

        action = self._resolve_action(current_status, new_status)

        # Timestamp di ciclo di vita: valorizzati solo se mancanti
        if new_status != current_status:
            now = utcnow()
            if new_status == InvoiceStatus.SENT and invoice.sent_at is None:
                changes.setdefault("sent_at", now)
            if new_status == InvoiceStatus.PAID and invoice.paid_at is None:
                changes.setdefault("paid_at", now)

        for field, value in changes.items():
            setattr(invoice, field, value)

        self.audit_service.record(db, invoice, action, actor)

        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.error("Errore di integrità durante aggiornamento fattura %s: %s", invoice_id, e.orig)
            raise DuplicateError("Numero fattura già esistente")
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Errore SQLAlchemy aggiornamento fattura: %s - %s", e.__class__.__name__, e)
            raise StorageError("Errore del database durante l'aggiornamento della fattura")

        logger.info(
            "Aggiornata fattura %s (%s): %s",
            invoice.number, action.value, ", ".join(sorted(changes)),
        )
        return invoice

    # ----------------------------------------------------------------
    # Eliminazione
    # ----------------------------------------------------------------

    async def delete(
        self,
        db: AsyncSession,
        invoice_id: int,
        actor: Optional[str] = None,
    ) -> None:
        """
        Elimina una fattura in bozza.

        Libera il preventivo di origine (invoice_id torna NULL) e registra
        l'evento 'suppression', tutto nella stessa transazione.

        Raises:
            NotFoundError: Fattura non trovata
            ForbiddenError: La fattura non è più in bozza
        """
        invoice = await self.get_by_id(db, invoice_id, for_update=True)

        if invoice.status != InvoiceStatus.DRAFT.value:
            logger.warning(
                "Eliminazione rifiutata: fattura %s in stato %s", invoice.number, invoice.status
            )
            raise ForbiddenError("Impossibile eliminare una fattura emessa.")

        if invoice.quote_id is not None:
            result = await db.execute(
                select(Quote).where(Quote.id == invoice.quote_id).with_for_update()
            )
            quote = result.scalar_one_or_none()
            if quote is not None and quote.invoice_id == invoice.id:
                quote.invoice_id = None

        self.audit_service.record(db, invoice, InvoiceAction.DELETION, actor)

        try:
            await db.delete(invoice)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Errore SQLAlchemy eliminazione fattura: %s - %s", e.__class__.__name__, e)
            raise StorageError("Errore del database durante l'eliminazione della fattura")

        logger.info("Eliminata fattura %s (id=%s)", invoice.number, invoice_id)

    # ----------------------------------------------------------------
    # Metodi privati di supporto
    # ----------------------------------------------------------------

    @staticmethod
    def _resolve_action(current: InvoiceStatus, new: InvoiceStatus) -> InvoiceAction:
        """Tag del journal per una modifica accettata."""
        if new == InvoiceStatus.SENT and current == InvoiceStatus.DRAFT:
            return InvoiceAction.EMISSION
        if new == InvoiceStatus.PAID and current != InvoiceStatus.PAID:
            return InvoiceAction.PAYMENT
        return InvoiceAction.MODIFICATION

    async def _ensure_number_available(self, db: AsyncSession, number: str) -> None:
        result = await db.execute(select(Invoice.id).where(Invoice.number == number))
        if result.scalar_one_or_none() is not None:
            logger.warning("Tentativo di usare un numero fattura duplicato: %s", number)
            raise DuplicateError(f"Il numero di fattura '{number}' esiste già")

    async def _lock_quote(self, db: AsyncSession, quote_id: int) -> Quote:
        result = await db.execute(
            select(Quote)
            .where(Quote.id == quote_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        quote = result.scalar_one_or_none()
        if quote is None:
            raise NotFoundError(f"Preventivo {quote_id} non trovato")
        return quote

    async def _ensure_quote_not_invoiced(self, db: AsyncSession, quote: Quote) -> None:
        """
        Controllo rapido: il preventivo non deve avere già una fattura.

        Non è autoritativo: sotto concorrenza la garanzia è il vincolo UNIQUE.
        """
        if quote.invoice_id is None:
            result = await db.execute(select(Invoice.id).where(Invoice.quote_id == quote.id))
            if result.scalar_one_or_none() is None:
                return
        logger.warning("Preventivo %s già fatturato", quote.number)
        raise ConflictError("Esiste già una fattura per questo preventivo.")

    @staticmethod
    def _conflict_from_integrity_error(error: IntegrityError, data: InvoiceCreate) -> ConflictError:
        """Traduce una violazione di vincolo nel conflitto corrispondente."""
        message = str(error.orig).lower()
        if "quote_id" in message or "invoice_id" in message:
            return ConflictError("Esiste già una fattura per questo preventivo.")
        if "number" in message:
            return DuplicateError(f"Il numero di fattura '{data.number}' esiste già")
        return ConflictError("Errore durante la creazione della fattura")
