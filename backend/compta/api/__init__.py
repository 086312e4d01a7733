"""
API Routes
Progetto: Compta Manager

Modulo per l'aggregazione dei router versionati.
"""

from compta.api.v1 import api_v1_router

__all__ = ["api_v1_router"]
