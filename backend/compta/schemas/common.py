"""
Schemas Pydantic condivisi tra i router
Progetto: Compta Manager
"""

from pydantic import BaseModel, Field


class IdResponse(BaseModel):
    """Risposta di una creazione: id della risorsa creata."""

    id: int = Field(..., description="ID della risorsa creata")


class SuccessResponse(BaseModel):
    """Conferma di un'operazione senza payload."""

    success: bool = True
