"""
Service Layer per i Preventivi
Progetto: Compta Manager

Ciclo di vita del preventivo: Brouillon → Envoyé → {Accepté, Refusé}.
La conversione in fattura è eseguita da InvoiceService.create().
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.config import settings
from compta.core.exceptions import DuplicateError, ForbiddenError, NotFoundError, StorageError
from compta.models import Quote
from compta.schemas.line_item import dump_items, verify_totals
from compta.schemas.quote import QuoteCreate, QuoteStatus, QuoteUpdate
from compta.services.client_service import ClientService
from compta.services.document_fields import (
    TOTAL_FIELDS,
    changed_values,
    supplied_values,
    verify_document_totals,
)

# Logger per questo modulo
logger = logging.getLogger(__name__)


class QuoteService:
    """
    Service per la gestione dei preventivi.

    Non mantiene stato proprio: ogni decisione è presa sullo stato
    persistito letto nella stessa transazione che applica la modifica.
    """

    def __init__(self, client_service: Optional[ClientService] = None) -> None:
        self.client_service = client_service or ClientService()

    async def get_all(
        self,
        db: AsyncSession,
        status_filter: Optional[QuoteStatus] = None,
        client_id: Optional[int] = None,
    ) -> list[Quote]:
        """Lista dei preventivi in ordine di numero decrescente."""
        stmt = select(Quote).order_by(Quote.number.desc())
        if status_filter is not None:
            stmt = stmt.where(Quote.status == status_filter.value)
        if client_id is not None:
            stmt = stmt.where(Quote.client_id == client_id)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(
        self,
        db: AsyncSession,
        quote_id: int,
        for_update: bool = False,
    ) -> Quote:
        """
        Recupera un preventivo per ID.

        Args:
            db: Sessione database
            quote_id: ID del preventivo
            for_update: Se True blocca la riga fino al termine della transazione

        Raises:
            NotFoundError: Preventivo non trovato
        """
        stmt = (
            select(Quote)
            .where(Quote.id == quote_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await db.execute(stmt)
        quote = result.scalar_one_or_none()

        if not quote:
            raise NotFoundError(f"Preventivo {quote_id} non trovato")

        return quote

    async def create(self, db: AsyncSession, data: QuoteCreate) -> Quote:
        """
        Crea un preventivo in stato Brouillon.

        Raises:
            DuplicateError: Numero già assegnato a un altro preventivo
            NotFoundError: Cliente inesistente
            BusinessValidationError: Totali incoerenti (se la verifica è attiva)
        """
        if settings.verify_document_totals:
            verify_totals(data.items, data.total_ht, data.total_tva, data.total_ttc)

        existing = await db.execute(select(Quote.id).where(Quote.number == data.number))
        if existing.scalar_one_or_none() is not None:
            logger.warning("Tentativo di creare preventivo con numero duplicato: %s", data.number)
            raise DuplicateError(f"Il numero di preventivo '{data.number}' esiste già")

        if data.client_id is not None:
            await self.client_service.get_by_id(db, data.client_id)

        quote = Quote(
            number=data.number,
            client_id=data.client_id,
            object=data.object,
            date=data.date,
            expiry_date=data.expiry_date,
            status=QuoteStatus.DRAFT.value,
            items=dump_items(data.items),
            total_ht=data.total_ht,
            total_tva=data.total_tva,
            total_ttc=data.total_ttc,
        )
        db.add(quote)

        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.error("Errore di integrità durante creazione preventivo: %s", e.orig)
            raise DuplicateError(f"Il numero di preventivo '{data.number}' esiste già")
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Errore SQLAlchemy creazione preventivo: %s - %s", e.__class__.__name__, e)
            raise StorageError("Errore del database durante la creazione del preventivo")

        logger.info("Creato preventivo %s (id=%s)", quote.number, quote.id)
        return quote

    async def update(
        self,
        db: AsyncSession,
        quote_id: int,
        data: QuoteUpdate,
    ) -> Quote:
        """
        Aggiornamento parziale di un preventivo.

        Lo stato deve appartenere a QuoteStatus (garantito dallo schema);
        non viene verificata la legalità della transizione.

        Raises:
            NotFoundError: Preventivo o cliente inesistente
        """
        quote = await self.get_by_id(db, quote_id, for_update=True)
        changes = changed_values(quote, supplied_values(data))

        if not changes:
            return quote

        if "client_id" in changes:
            await self.client_service.get_by_id(db, changes["client_id"])

        if settings.verify_document_totals and (
            "items" in changes or any(name in changes for name in TOTAL_FIELDS)
        ):
            verify_document_totals(quote, changes)

        for field, value in changes.items():
            setattr(quote, field, value)

        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Errore SQLAlchemy aggiornamento preventivo: %s - %s", e.__class__.__name__, e)
            raise StorageError("Errore del database durante l'aggiornamento del preventivo")

        logger.info("Aggiornato preventivo %s: %s", quote.number, ", ".join(sorted(changes)))
        return quote

    async def delete(self, db: AsyncSession, quote_id: int) -> None:
        """
        Elimina un preventivo.

        Un preventivo già convertito in fattura non può essere eliminato:
        la fattura perderebbe il riferimento alla sua origine.

        Raises:
            NotFoundError: Preventivo non trovato
            ForbiddenError: Preventivo già convertito in fattura
        """
        quote = await self.get_by_id(db, quote_id, for_update=True)

        if quote.invoice_id is not None:
            logger.warning(
                "Eliminazione preventivo %s rifiutata: convertito nella fattura %s",
                quote.number, quote.invoice_id,
            )
            raise ForbiddenError(
                "Impossibile eliminare un preventivo già convertito in fattura",
                extra={"invoice_id": quote.invoice_id},
            )

        try:
            await db.delete(quote)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Errore SQLAlchemy eliminazione preventivo: %s - %s", e.__class__.__name__, e)
            raise StorageError("Errore del database durante l'eliminazione del preventivo")

        logger.info("Eliminato preventivo %s (id=%s)", quote.number, quote_id)
