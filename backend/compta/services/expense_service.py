"""
Service Layer per le Spese
Progetto: Compta Manager

CRUD delle spese; le ricevute inviate come data URI vengono salvate
tramite AttachmentService prima della scrittura a database.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.exceptions import NotFoundError, StorageError
from compta.models import Expense
from compta.schemas.expense import ExpenseCreate, ExpenseUpdate
from compta.services.attachment_service import AttachmentService
from compta.services.client_service import ClientService
from compta.services.document_fields import supplied_values

# Logger per questo modulo
logger = logging.getLogger(__name__)


class ExpenseService:
    """
    Service per la gestione delle spese.

    Fornisce metodi asincroni per interagire con il database
    in modo centralizzato, senza dipendenze da FastAPI.
    """

    def __init__(
        self,
        attachment_service: Optional[AttachmentService] = None,
        client_service: Optional[ClientService] = None,
    ) -> None:
        self.attachment_service = attachment_service or AttachmentService()
        self.client_service = client_service or ClientService()

    async def get_all(self, db: AsyncSession) -> list[Expense]:
        """Spese dalla più recente."""
        stmt = select(Expense).order_by(Expense.date.desc(), Expense.id.desc())
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, db: AsyncSession, expense_id: int) -> Expense:
        """
        Recupera una spesa tramite ID.

        Raises:
            NotFoundError: Se la spesa non esiste
        """
        expense = await db.get(Expense, expense_id)
        if expense is None:
            raise NotFoundError(f"Spesa {expense_id} non trovata")
        return expense

    async def create(self, db: AsyncSession, data: ExpenseCreate) -> Expense:
        """
        Registra una nuova spesa.

        Raises:
            NotFoundError: Cliente inesistente
            BusinessValidationError: Allegato non valido
        """
        values = self._prepare(data)
        if "client_id" in values:
            await self.client_service.get_by_id(db, values["client_id"])

        expense = Expense(**values)
        db.add(expense)
        await self._commit(db, "creazione")

        logger.info("Registrata spesa %s (%s)", expense.id, expense.type)
        return expense

    async def update(self, db: AsyncSession, expense_id: int, data: ExpenseUpdate) -> Expense:
        """Aggiornamento parziale di una spesa."""
        expense = await self.get_by_id(db, expense_id)
        values = self._prepare(data)
        if "client_id" in values:
            await self.client_service.get_by_id(db, values["client_id"])

        for field, value in values.items():
            setattr(expense, field, value)
        await self._commit(db, "aggiornamento")
        return expense

    async def delete(self, db: AsyncSession, expense_id: int) -> None:
        """
        Elimina una spesa. Il file della ricevuta resta su disco.

        Raises:
            NotFoundError: Se la spesa non esiste
        """
        expense = await self.get_by_id(db, expense_id)
        await db.delete(expense)
        await self._commit(db, "eliminazione")
        logger.info("Eliminata spesa %s", expense_id)

    # ----------------------------------------------------------------
    # Metodi privati di supporto
    # ----------------------------------------------------------------

    def _prepare(self, data) -> dict:
        values = supplied_values(data)
        if "receipt_path" in values:
            values["receipt_path"] = self.attachment_service.save(values["receipt_path"])
        return values

    async def _commit(self, db: AsyncSession, operation: str) -> None:
        try:
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Errore SQLAlchemy %s spesa: %s - %s", operation, e.__class__.__name__, e)
            await db.rollback()
            raise StorageError(f"Errore del database durante l'{operation} della spesa")
