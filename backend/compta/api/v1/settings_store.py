"""
Router FastAPI per le impostazioni applicative
Progetto: Compta Manager

Dati aziendali, numerazione e preferenze salvati come coppie chiave/valore.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.database import get_db
from compta.schemas.common import SuccessResponse
from compta.services.settings_service import SettingsService

router = APIRouter(
    prefix="/settings",
    tags=["Impostazioni"],
)

settings_service = SettingsService()


@router.get(
    "/",
    name="impostazioni_lista",
    summary="Tutte le impostazioni",
    status_code=status.HTTP_200_OK,
)
async def read_settings(db: AsyncSession = Depends(get_db)) -> dict[str, Any]:
    return await settings_service.get_all(db)


@router.post(
    "/",
    name="impostazioni_salva",
    summary="Salva impostazioni",
    description="Inserisce o sostituisce ogni chiave fornita; le altre restano invariate.",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def save_settings(
    values: dict[str, Any] = Body(..., description="Mappa chiave → valore JSON"),
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    await settings_service.upsert_many(db, values)
    return SuccessResponse()
