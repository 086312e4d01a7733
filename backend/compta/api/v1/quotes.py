"""
Router FastAPI per i Preventivi
Progetto: Compta Manager

Definisce gli endpoint API per la gestione dei preventivi (devis).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.database import get_db
from compta.schemas.common import IdResponse, SuccessResponse
from compta.schemas.quote import QuoteCreate, QuoteRead, QuoteStatus, QuoteUpdate
from compta.services.quote_service import QuoteService

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/quotes",
    tags=["Preventivi"],
)


# -------------------------------------------------------------------
# Dependency Injection
# -------------------------------------------------------------------

def get_quote_service() -> QuoteService:
    """Dependency per ottenere un'istanza del QuoteService."""
    return QuoteService()


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------

@router.get(
    "/",
    name="preventivi_lista",
    summary="Lista preventivi",
    description="Recupera i preventivi, dal numero più alto, con filtri opzionali.",
    response_model=list[QuoteRead],
    status_code=status.HTTP_200_OK,
)
async def list_quotes(
    status_filter: Optional[QuoteStatus] = Query(None, alias="status", description="Filtra per stato"),
    client_id: Optional[int] = Query(None, description="Filtra per cliente"),
    db: AsyncSession = Depends(get_db),
    service: QuoteService = Depends(get_quote_service),
) -> list[QuoteRead]:
    quotes = await service.get_all(db, status_filter=status_filter, client_id=client_id)
    return [QuoteRead.model_validate(q) for q in quotes]


@router.get(
    "/{quote_id}",
    name="preventivo_dettaglio",
    summary="Dettaglio preventivo",
    response_model=QuoteRead,
    status_code=status.HTTP_200_OK,
)
async def get_quote(
    quote_id: int = Path(..., description="ID del preventivo"),
    db: AsyncSession = Depends(get_db),
    service: QuoteService = Depends(get_quote_service),
) -> QuoteRead:
    quote = await service.get_by_id(db, quote_id)
    return QuoteRead.model_validate(quote)


@router.post(
    "/",
    name="preventivo_crea",
    summary="Crea preventivo",
    description="Crea un nuovo preventivo in stato Brouillon.",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_quote(
    data: QuoteCreate,
    db: AsyncSession = Depends(get_db),
    service: QuoteService = Depends(get_quote_service),
) -> IdResponse:
    """
    Crea un nuovo preventivo.

    Raises:
        409: Numero già esistente
        404: Cliente inesistente
        422: Dati non validi
    """
    quote = await service.create(db, data)
    return IdResponse(id=quote.id)


@router.put(
    "/{quote_id}",
    name="preventivo_aggiorna",
    summary="Aggiorna preventivo",
    description="Aggiornamento parziale: i campi omessi restano invariati.",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def update_quote(
    data: QuoteUpdate,
    quote_id: int = Path(..., description="ID del preventivo"),
    db: AsyncSession = Depends(get_db),
    service: QuoteService = Depends(get_quote_service),
) -> SuccessResponse:
    await service.update(db, quote_id, data)
    return SuccessResponse()


@router.delete(
    "/{quote_id}",
    name="preventivo_elimina",
    summary="Elimina preventivo",
    description="Elimina un preventivo non ancora convertito in fattura.",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_quote(
    quote_id: int = Path(..., description="ID del preventivo"),
    db: AsyncSession = Depends(get_db),
    service: QuoteService = Depends(get_quote_service),
) -> SuccessResponse:
    """
    Elimina un preventivo.

    Raises:
        404: Preventivo non trovato
        403: Preventivo già convertito in fattura
    """
    await service.delete(db, quote_id)
    return SuccessResponse()
