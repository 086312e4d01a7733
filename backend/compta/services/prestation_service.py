"""
Service Layer per il catalogo prestazioni
Progetto: Compta Manager
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.exceptions import StorageError
from compta.models import Prestation
from compta.schemas.prestation import PrestationCreate
from compta.services.document_fields import supplied_values

# Logger per questo modulo
logger = logging.getLogger(__name__)


class PrestationService:
    """Lettura e inserimento delle voci di catalogo."""

    async def get_all(self, db: AsyncSession) -> list[Prestation]:
        result = await db.execute(select(Prestation).order_by(Prestation.name.asc()))
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, data: PrestationCreate) -> Prestation:
        """Aggiunge una voce al catalogo."""
        prestation = Prestation(**supplied_values(data))
        db.add(prestation)
        try:
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Errore SQLAlchemy creazione prestazione: %s - %s", e.__class__.__name__, e)
            await db.rollback()
            raise StorageError("Errore del database durante la creazione della prestazione")

        logger.info("Creata prestazione: %s - %s", prestation.id, prestation.name)
        return prestation
