"""
Router FastAPI per l'entità Client
Progetto: Compta Manager

Definisce gli endpoint API per la gestione dei clienti.
"""

import logging

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.database import get_db
from compta.schemas.client import ClientCreate, ClientRead, ClientUpdate
from compta.schemas.common import SuccessResponse
from compta.services.client_service import ClientService

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/clients",
    tags=["Clienti"],
)


# -------------------------------------------------------------------
# Dependency Injection
# -------------------------------------------------------------------

def get_client_service() -> ClientService:
    """
    Dependency per ottenere un'istanza del ClientService.

    Permette di sostituire il service nei test tramite dependency_overrides.
    """
    return ClientService()


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------

@router.get(
    "/",
    name="clienti_lista",
    summary="Lista clienti",
    response_model=list[ClientRead],
    status_code=status.HTTP_200_OK,
)
async def list_clients(
    db: AsyncSession = Depends(get_db),
    service: ClientService = Depends(get_client_service),
) -> list[ClientRead]:
    clients = await service.get_all(db)
    return [ClientRead.model_validate(c) for c in clients]


@router.get(
    "/{client_id}",
    name="cliente_dettaglio",
    summary="Dettaglio cliente",
    response_model=ClientRead,
    status_code=status.HTTP_200_OK,
)
async def get_client(
    client_id: int = Path(..., description="ID del cliente"),
    db: AsyncSession = Depends(get_db),
    service: ClientService = Depends(get_client_service),
) -> ClientRead:
    client = await service.get_by_id(db, client_id)
    return ClientRead.model_validate(client)


@router.post(
    "/",
    name="cliente_crea",
    summary="Crea cliente",
    response_model=ClientRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_client(
    data: ClientCreate,
    db: AsyncSession = Depends(get_db),
    service: ClientService = Depends(get_client_service),
) -> ClientRead:
    client = await service.create(db, data)
    return ClientRead.model_validate(client)


@router.put(
    "/{client_id}",
    name="cliente_aggiorna",
    summary="Aggiorna cliente",
    response_model=ClientRead,
    status_code=status.HTTP_200_OK,
)
async def update_client(
    data: ClientUpdate,
    client_id: int = Path(..., description="ID del cliente"),
    db: AsyncSession = Depends(get_db),
    service: ClientService = Depends(get_client_service),
) -> ClientRead:
    client = await service.update(db, client_id, data)
    return ClientRead.model_validate(client)


@router.delete(
    "/{client_id}",
    name="cliente_elimina",
    summary="Elimina cliente",
    description="Elimina un cliente non referenziato da preventivi o fatture.",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_client(
    client_id: int = Path(..., description="ID del cliente"),
    db: AsyncSession = Depends(get_db),
    service: ClientService = Depends(get_client_service),
) -> SuccessResponse:
    """
    Elimina un cliente.

    Raises:
        404: Cliente non trovato
        409: Cliente referenziato da documenti
    """
    await service.delete(db, client_id)
    return SuccessResponse()
