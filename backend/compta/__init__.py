"""
Compta Manager - Backend
Gestionale di preventivi, fatture e spese per professionisti.
"""

__version__ = "1.0.0"
