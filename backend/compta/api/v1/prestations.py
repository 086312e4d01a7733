"""
Router FastAPI per il catalogo prestazioni
Progetto: Compta Manager
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.database import get_db
from compta.schemas.common import IdResponse
from compta.schemas.prestation import PrestationCreate, PrestationRead
from compta.services.prestation_service import PrestationService

router = APIRouter(
    prefix="/prestations",
    tags=["Catalogo"],
)

prestation_service = PrestationService()


@router.get(
    "/",
    name="prestazioni_lista",
    summary="Lista prestazioni",
    response_model=list[PrestationRead],
    status_code=status.HTTP_200_OK,
)
async def list_prestations(db: AsyncSession = Depends(get_db)) -> list[PrestationRead]:
    prestations = await prestation_service.get_all(db)
    return [PrestationRead.model_validate(p) for p in prestations]


@router.post(
    "/",
    name="prestazione_crea",
    summary="Crea prestazione",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_prestation(
    data: PrestationCreate,
    db: AsyncSession = Depends(get_db),
) -> IdResponse:
    prestation = await prestation_service.create(db, data)
    return IdResponse(id=prestation.id)
