"""
API v1 Routes
Progetto: Compta Manager

Router versione 1 dell'API.
"""

from fastapi import APIRouter

from compta.api.v1 import clients, expenses, invoices, prestations, quotes, settings_store

# Router aggregato per v1
api_v1_router = APIRouter(prefix="/api/v1")

# Includi i router dei moduli
api_v1_router.include_router(clients.router)
api_v1_router.include_router(prestations.router)
api_v1_router.include_router(quotes.router)
api_v1_router.include_router(invoices.router)
api_v1_router.include_router(expenses.router)
api_v1_router.include_router(settings_store.router)

# Esportazione
__all__ = ["api_v1_router"]
