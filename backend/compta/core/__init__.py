"""
Core dell'applicazione: configurazione, database ed eccezioni.
"""
