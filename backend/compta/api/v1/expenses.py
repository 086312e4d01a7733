"""
Router FastAPI per le Spese
Progetto: Compta Manager

Le ricevute possono essere inviate come data URI base64 nel campo
receipt_path: vengono salvate e sostituite dal percorso /uploads/...
"""

import logging

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.database import get_db
from compta.schemas.common import IdResponse, SuccessResponse
from compta.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseUpdate
from compta.services.expense_service import ExpenseService

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/expenses",
    tags=["Spese"],
)


def get_expense_service() -> ExpenseService:
    """Dependency per ottenere un'istanza dell'ExpenseService."""
    return ExpenseService()


@router.get(
    "/",
    name="spese_lista",
    summary="Lista spese",
    response_model=list[ExpenseRead],
    status_code=status.HTTP_200_OK,
)
async def list_expenses(
    db: AsyncSession = Depends(get_db),
    service: ExpenseService = Depends(get_expense_service),
) -> list[ExpenseRead]:
    expenses = await service.get_all(db)
    return [ExpenseRead.model_validate(e) for e in expenses]


@router.get(
    "/{expense_id}",
    name="spesa_dettaglio",
    summary="Dettaglio spesa",
    response_model=ExpenseRead,
    status_code=status.HTTP_200_OK,
)
async def get_expense(
    expense_id: int = Path(..., description="ID della spesa"),
    db: AsyncSession = Depends(get_db),
    service: ExpenseService = Depends(get_expense_service),
) -> ExpenseRead:
    expense = await service.get_by_id(db, expense_id)
    return ExpenseRead.model_validate(expense)


@router.post(
    "/",
    name="spesa_crea",
    summary="Registra spesa",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_expense(
    data: ExpenseCreate,
    db: AsyncSession = Depends(get_db),
    service: ExpenseService = Depends(get_expense_service),
) -> IdResponse:
    expense = await service.create(db, data)
    return IdResponse(id=expense.id)


@router.put(
    "/{expense_id}",
    name="spesa_aggiorna",
    summary="Aggiorna spesa",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def update_expense(
    data: ExpenseUpdate,
    expense_id: int = Path(..., description="ID della spesa"),
    db: AsyncSession = Depends(get_db),
    service: ExpenseService = Depends(get_expense_service),
) -> SuccessResponse:
    await service.update(db, expense_id, data)
    return SuccessResponse()


@router.delete(
    "/{expense_id}",
    name="spesa_elimina",
    summary="Elimina spesa",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_expense(
    expense_id: int = Path(..., description="ID della spesa"),
    db: AsyncSession = Depends(get_db),
    service: ExpenseService = Depends(get_expense_service),
) -> SuccessResponse:
    await service.delete(db, expense_id)
    return SuccessResponse()
