"""
Router FastAPI per la Fatturazione
Progetto: Compta Manager

Definisce gli endpoint API per la gestione delle fatture:
creazione (anche da preventivo), ciclo di vita e journal di audit.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from compta.core.database import get_db
from compta.schemas.common import IdResponse, SuccessResponse
from compta.schemas.invoice import (
    InvoiceCreate,
    InvoiceEventRead,
    InvoiceRead,
    InvoiceStatus,
    InvoiceUpdate,
)
from compta.services.invoice_service import InvoiceService

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Router con prefix e tag
router = APIRouter(
    prefix="/invoices",
    tags=["Fatturazione"],
)


# -------------------------------------------------------------------
# Dependency Injection
# -------------------------------------------------------------------

def get_invoice_service() -> InvoiceService:
    """Dependency per ottenere un'istanza dell'InvoiceService."""
    return InvoiceService()


def get_actor(
    x_actor: Optional[str] = Header(None, alias="X-Actor", description="Autore registrato nel journal"),
) -> Optional[str]:
    """Attore della richiesta; None lascia il default di configurazione."""
    if x_actor is None:
        return None
    return x_actor.strip() or None


# -------------------------------------------------------------------
# Endpoints per Fatture
# -------------------------------------------------------------------

@router.get(
    "/",
    name="fatture_lista",
    summary="Lista fatture",
    description="Recupera le fatture, dal numero più alto, con filtri opzionali.",
    response_model=list[InvoiceRead],
    status_code=status.HTTP_200_OK,
)
async def list_invoices(
    status_filter: Optional[InvoiceStatus] = Query(None, alias="status", description="Filtra per stato"),
    client_id: Optional[int] = Query(None, description="Filtra per cliente"),
    db: AsyncSession = Depends(get_db),
    service: InvoiceService = Depends(get_invoice_service),
) -> list[InvoiceRead]:
    invoices = await service.get_all(db, status_filter=status_filter, client_id=client_id)
    return [InvoiceRead.model_validate(i) for i in invoices]


@router.get(
    "/{invoice_id}",
    name="fattura_dettaglio",
    summary="Dettaglio fattura",
    response_model=InvoiceRead,
    status_code=status.HTTP_200_OK,
)
async def get_invoice(
    invoice_id: int = Path(..., description="ID della fattura"),
    db: AsyncSession = Depends(get_db),
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceRead:
    invoice = await service.get_by_id(db, invoice_id)
    return InvoiceRead.model_validate(invoice)


@router.get(
    "/{invoice_id}/events",
    name="fattura_journal",
    summary="Journal della fattura",
    description="Eventi di audit della fattura in ordine cronologico, anche dopo l'eliminazione.",
    response_model=list[InvoiceEventRead],
    status_code=status.HTTP_200_OK,
)
async def list_invoice_events(
    invoice_id: int = Path(..., description="ID della fattura"),
    db: AsyncSession = Depends(get_db),
    service: InvoiceService = Depends(get_invoice_service),
) -> list[InvoiceEventRead]:
    events = await service.get_events(db, invoice_id)
    return [InvoiceEventRead.model_validate(e) for e in events]


@router.post(
    "/",
    name="fattura_crea",
    summary="Crea fattura",
    description=(
        "Crea una fattura. Se quote_id è valorizzato, il preventivo viene "
        "collegato e non potrà essere fatturato una seconda volta."
    ),
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice(
    data: InvoiceCreate,
    db: AsyncSession = Depends(get_db),
    service: InvoiceService = Depends(get_invoice_service),
    actor: Optional[str] = Depends(get_actor),
) -> IdResponse:
    """
    Crea una nuova fattura.

    Args:
        data: Dati della fattura
        db: Sessione database
        service: Istanza dell'InvoiceService
        actor: Autore dell'evento di creazione (header X-Actor)

    Raises:
        409: Numero duplicato o preventivo già fatturato
        404: Preventivo o cliente inesistente
        422: Dati non validi
    """
    invoice = await service.create(db, data, actor=actor)
    return IdResponse(id=invoice.id)


@router.put(
    "/{invoice_id}",
    name="fattura_aggiorna",
    summary="Aggiorna fattura",
    description=(
        "Aggiornamento parziale. Dopo l'emissione sono modificabili solo stato, "
        "pagamento e trasmissione; lo stato può solo avanzare."
    ),
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def update_invoice(
    data: InvoiceUpdate,
    invoice_id: int = Path(..., description="ID della fattura"),
    db: AsyncSession = Depends(get_db),
    service: InvoiceService = Depends(get_invoice_service),
    actor: Optional[str] = Depends(get_actor),
) -> SuccessResponse:
    await service.update(db, invoice_id, data, actor=actor)
    return SuccessResponse()


@router.delete(
    "/{invoice_id}",
    name="fattura_elimina",
    summary="Elimina fattura",
    description="Elimina una fattura in bozza e libera il preventivo di origine.",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_invoice(
    invoice_id: int = Path(..., description="ID della fattura"),
    db: AsyncSession = Depends(get_db),
    service: InvoiceService = Depends(get_invoice_service),
    actor: Optional[str] = Depends(get_actor),
) -> SuccessResponse:
    """
    Elimina una fattura.

    Raises:
        404: Fattura non trovata
        403: Fattura già emessa
    """
    await service.delete(db, invoice_id, actor=actor)
    return SuccessResponse()
