"""
Configurazione Database - SQLAlchemy 2.0 Async
Progetto: Compta Manager

Definisce engine, session factory e dependency injection per FastAPI.
Nessun handle globale viene passato ai service: ogni richiesta riceve
la propria AsyncSession tramite get_db().
"""

import logging
from typing import Any, AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from compta.core.config import settings

# Logger per questo modulo
logger = logging.getLogger(__name__)


def build_engine(database_url: str, **kwargs: Any) -> AsyncEngine:
    """
    Crea un engine async per l'URL indicato.

    Su PostgreSQL applica le impostazioni del pool; su SQLite abilita
    i vincoli di foreign key, disattivati di default dal driver.

    Args:
        database_url: URL in formato async (postgresql+asyncpg, sqlite+aiosqlite)
        **kwargs: Argomenti aggiuntivi per create_async_engine

    Returns:
        AsyncEngine: Engine configurato
    """
    options: dict[str, Any] = {
        "echo": settings.debug,  # Log query in modalità debug
        "pool_pre_ping": True,
    }
    if not database_url.startswith("sqlite"):
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
    options.update(kwargs)

    new_engine = create_async_engine(database_url, **options)

    if database_url.startswith("sqlite"):
        @event.listens_for(new_engine.sync_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory con le opzioni usate in tutta l'applicazione."""
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# ------------------------------------------------------------
# Engine e Session Factory di default
# ------------------------------------------------------------
engine: AsyncEngine = build_engine(settings.database_url)

AsyncSessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency injection per FastAPI.

    Crea una sessione database per ogni richiesta e la chiude
    automaticamente al termine. Il commit è responsabilità dei service;
    qualsiasi eccezione non gestita annulla la transazione aperta.

    Yields:
        AsyncSession: Sessione database async
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(bind: AsyncEngine | None = None) -> None:
    """
    Inizializza la connessione al database.

    Esegue un test di connessione e, se configurato, crea le tabelle mancanti.
    """
    # Import locale: registra tutti i modelli sul metadata prima di create_all
    from compta.models import Base

    target = bind or engine
    try:
        async with target.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if settings.db_create_all:
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Connessione al database stabilita con successo")
    except Exception as e:
        logger.error("Errore connessione database: %s", e)
        raise


async def close_db(bind: AsyncEngine | None = None) -> None:
    """
    Chiude le connessioni al database.

    Da chiamare durante lo shutdown dell'applicazione.
    """
    await (bind or engine).dispose()
    logger.info("Connessioni database chiuse")
