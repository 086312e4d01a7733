"""
Service Layer per l'entità Client
Progetto: Compta Manager

Semplice CRUD sull'anagrafica clienti, senza regole di business oltre
alla protezione dei documenti che referenziano il cliente.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.exceptions import ConflictError, NotFoundError, StorageError
from compta.models import Client
from compta.schemas.client import ClientCreate, ClientUpdate
from compta.services.document_fields import supplied_values

# Logger per questo modulo
logger = logging.getLogger(__name__)


class ClientService:
    """
    Service per la gestione delle operazioni CRUD sui clienti.

    Fornisce metodi asincroni per interagire con il database
    in modo centralizzato, senza dipendenze da FastAPI.
    """

    async def get_all(self, db: AsyncSession) -> list[Client]:
        """Recupera tutti i clienti in ordine alfabetico."""
        result = await db.execute(select(Client).order_by(Client.name.asc()))
        return list(result.scalars().all())

    async def get_by_id(self, db: AsyncSession, client_id: int) -> Client:
        """
        Recupera un cliente tramite ID.

        Raises:
            NotFoundError: Se il cliente non esiste
        """
        client = await db.get(Client, client_id)
        if client is None:
            raise NotFoundError(f"Cliente {client_id} non trovato")
        return client

    async def create(self, db: AsyncSession, data: ClientCreate) -> Client:
        """Crea un nuovo cliente."""
        client = Client(**supplied_values(data))
        db.add(client)
        try:
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Errore SQLAlchemy creazione cliente: %s - %s", e.__class__.__name__, e)
            await db.rollback()
            raise StorageError("Errore del database durante la creazione del cliente")

        logger.info("Creato nuovo cliente: %s - %s", client.id, client.name)
        return client

    async def update(self, db: AsyncSession, client_id: int, data: ClientUpdate) -> Client:
        """
        Aggiorna i campi forniti di un cliente.

        Raises:
            NotFoundError: Se il cliente non esiste
        """
        client = await self.get_by_id(db, client_id)
        for field, value in supplied_values(data).items():
            setattr(client, field, value)

        try:
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Errore SQLAlchemy aggiornamento cliente: %s - %s", e.__class__.__name__, e)
            await db.rollback()
            raise StorageError("Errore del database durante l'aggiornamento del cliente")

        return client

    async def delete(self, db: AsyncSession, client_id: int) -> None:
        """
        Elimina un cliente.

        Raises:
            NotFoundError: Se il cliente non esiste
            ConflictError: Se il cliente è ancora referenziato da preventivi o fatture
        """
        client = await self.get_by_id(db, client_id)
        try:
            await db.delete(client)
            await db.commit()
        except IntegrityError as e:
            logger.warning("Eliminazione cliente %s rifiutata: %s", client_id, e.orig)
            await db.rollback()
            raise ConflictError(
                "Il cliente è referenziato da preventivi o fatture e non può essere eliminato"
            )
        except SQLAlchemyError as e:
            logger.error("Errore SQLAlchemy eliminazione cliente: %s - %s", e.__class__.__name__, e)
            await db.rollback()
            raise StorageError("Errore del database durante l'eliminazione del cliente")

        logger.info("Eliminato cliente: %s", client_id)
