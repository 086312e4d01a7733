"""
Pytest configuration and fixtures.

I test dei service girano su un database SQLite in memoria (aiosqlite +
StaticPool), così che vincoli UNIQUE e foreign key siano quelli reali.
I test API usano httpx.AsyncClient su ASGITransport con get_db sostituita.
"""

import os
import tempfile
from decimal import Decimal
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# Le impostazioni vengono lette all'import di compta: cartella allegati isolata
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="compta-uploads-"))

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool

from compta.core.database import build_engine, build_sessionmaker, get_db
from compta.models import Base, Client
from compta.schemas.invoice import InvoiceCreate
from compta.schemas.line_item import LineItem
from compta.schemas.quote import QuoteCreate


# ============================================================
# Fixtures per AsyncSession Mock
# ============================================================


@pytest.fixture
def mock_db():
    """Crea un mock di AsyncSession."""
    db = AsyncMock(spec=AsyncSession)
    db.execute = AsyncMock()
    db.add = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.flush = AsyncMock()
    db.delete = AsyncMock()
    db.get = AsyncMock()
    return db


# ============================================================
# Fixtures per database SQLite in memoria
# ============================================================


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Engine in memoria con schema completo, ricreato per ogni test."""
    test_engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Sessione reale sul database di test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def api_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Client HTTP sull'applicazione, una sessione per richiesta."""
    from compta.main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ============================================================
# Fixtures per dati di esempio
# ============================================================


@pytest.fixture
async def client_row(db_session) -> Client:
    """Cliente persistito."""
    client = Client(name="Atelier Dupont", email="contact@dupont.fr", typology="professionnel")
    db_session.add(client)
    await db_session.commit()
    return client


@pytest.fixture
def sample_items() -> list[LineItem]:
    """Due righe: 2 x 50 + 1 x 100 = 200 HT."""
    return [
        LineItem(description="Conseil", quantity=Decimal("2"), unit_price=Decimal("50.00"), tax_rate=Decimal("20")),
        LineItem(
            description="Audit",
            quantity=Decimal("1"),
            unit_price=Decimal("100.00"),
            tax_rate=Decimal("20"),
            prestation_id=7,
        ),
    ]


@pytest.fixture
def make_quote_data(client_row, sample_items):
    """Factory di QuoteCreate coerenti con sample_items."""
    def _make(number: str = "D-2024-001", **overrides) -> QuoteCreate:
        payload = {
            "number": number,
            "client_id": client_row.id,
            "object": "Mission de conseil",
            "items": sample_items,
            "total_ht": Decimal("200.00"),
            "total_tva": Decimal("40.00"),
            "total_ttc": Decimal("240.00"),
        }
        payload.update(overrides)
        return QuoteCreate(**payload)
    return _make


@pytest.fixture
def make_invoice_data(client_row, sample_items):
    """Factory di InvoiceCreate coerenti con sample_items."""
    def _make(number: str = "F-2024-001", **overrides) -> InvoiceCreate:
        payload = {
            "number": number,
            "client_id": client_row.id,
            "object": "Mission de conseil",
            "items": sample_items,
            "total_ht": Decimal("200.00"),
            "total_tva": Decimal("40.00"),
            "total_ttc": Decimal("240.00"),
        }
        payload.update(overrides)
        return InvoiceCreate(**payload)
    return _make
