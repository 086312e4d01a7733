import asyncio
import sys
import os

# Aggiungi backend/ alla PYTHONPATH per importare compta.*
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "backend"))

from compta.core.database import close_db, engine
from compta.models import Base


async def reset():
    print(f"Connessione a {engine.url.render_as_string(hide_password=True)}, eliminazione tabelle...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        print("Tabelle eliminate. Creazione nuove tabelle...")
        await conn.run_sync(Base.metadata.create_all)
    await close_db()
    print("Database resettato con successo!")

if __name__ == "__main__":
    asyncio.run(reset())
