"""
Service Layer per le impostazioni chiave/valore
Progetto: Compta Manager
"""

import json
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.exceptions import StorageError
from compta.models import Setting

# Logger per questo modulo
logger = logging.getLogger(__name__)


class SettingsService:
    """
    Archivio delle impostazioni applicative (dati aziendali, numerazione, ...).

    I valori sono salvati in JSON; le righe storiche con testo semplice
    vengono restituite così come sono.
    """

    async def get_all(self, db: AsyncSession) -> dict[str, Any]:
        result = await db.execute(select(Setting).order_by(Setting.key))
        return {row.key: self._decode(row.value) for row in result.scalars().all()}

    async def upsert_many(self, db: AsyncSession, values: dict[str, Any]) -> None:
        """
        Inserisce o sostituisce ogni chiave, in un'unica transazione.

        Raises:
            StorageError: Errore del database (nessuna chiave viene scritta)
        """
        for key, value in values.items():
            await db.merge(Setting(key=key, value=json.dumps(value)))

        try:
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Errore SQLAlchemy salvataggio impostazioni: %s - %s", e.__class__.__name__, e)
            await db.rollback()
            raise StorageError("Errore del database durante il salvataggio delle impostazioni")

        logger.info("Salvate impostazioni: %s", ", ".join(sorted(values)))

    @staticmethod
    def _decode(raw: str | None) -> Any:
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            return raw
