"""
Configurazione applicazione - Settings
Progetto: Compta Manager

Definisce le impostazioni dell'applicazione caricate da variabili d'ambiente.
"""


from __future__ import annotations
import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configurazione applicazione.

    Carica le impostazioni da variabili d'ambiente.
    Valori di default adatti per sviluppo locale (SQLite su file).

    Per ottenere un'istanza singleton:
    - In FastAPI: usa `Depends(get_settings)` per Dependency Injection
    - Altrove: usa `get_settings()` direttamente
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # ------------------------------------------------------------
    # Configurazione Database
    # ------------------------------------------------------------
    database_url: str = Field(
        default="sqlite+aiosqlite:///./compta.db",
        description="URL connessione database (formato async: postgresql+asyncpg o sqlite+aiosqlite)",
    )

    db_pool_size: int = Field(
        default=5,
        description="Numero connessioni permanenti nel pool (ignorato su SQLite)",
    )

    db_max_overflow: int = Field(
        default=10,
        description="Connessioni extra temporanee oltre pool_size (ignorato su SQLite)",
    )

    db_create_all: bool = Field(
        default=True,
        description="Crea le tabelle mancanti all'avvio",
    )

    # ------------------------------------------------------------
    # Configurazione Applicazione
    # ------------------------------------------------------------
    app_name: str = Field(
        default="Compta Manager",
        description="Nome applicazione",
    )

    app_version: str = Field(
        default="1.0.0",
        description="Versione applicazione",
    )

    app_env: Literal["development", "production", "testing"] = Field(
        default="development",
        description="Ambiente di esecuzione (development | production | testing)",
    )

    debug: bool = Field(
        default=False,
        description="Modalità debug",
    )

    # ------------------------------------------------------------
    # Configurazione CORS
    # ------------------------------------------------------------
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Origini CORS permesse",
    )

    # ------------------------------------------------------------
    # Configurazione Logging
    # ------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Livello logging",
    )

    # ------------------------------------------------------------
    # Configurazione Allegati (ricevute spese)
    # ------------------------------------------------------------
    uploads_dir: str = Field(
        default="./uploads",
        description="Cartella in cui vengono salvati gli allegati",
    )

    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Dimensione massima di un allegato decodificato",
    )

    # ------------------------------------------------------------
    # Configurazione Documenti
    # ------------------------------------------------------------
    audit_default_actor: str = Field(
        default="system",
        description="Attore registrato nel journal quando la richiesta non ne indica uno",
    )

    verify_document_totals: bool = Field(
        default=False,
        description="Se True, rifiuta preventivi/fatture i cui totali non corrispondono alle righe",
    )

    @property
    def is_production(self) -> bool:
        """Verifica se l'applicazione è in produzione."""
        return self.app_env == "production"

    @property
    def is_sqlite(self) -> bool:
        """Verifica se il database configurato è SQLite."""
        return self.database_url.startswith("sqlite")

    # ------------------------------------------------------------
    # Validatori
    # ------------------------------------------------------------

    @field_validator("audit_default_actor")
    @classmethod
    def validate_audit_default_actor(cls, v: str) -> str:
        """L'attore di default non può essere vuoto."""
        if not v.strip():
            raise ValueError("audit_default_actor non può essere vuoto")
        return v.strip()

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validazione settings obbligatori in produzione."""
        if self.app_env != "production":
            return self

        errors = []

        if "changeme" in self.database_url.lower():
            errors.append("- database_url: non deve contenere 'changeme'")

        if not self.uploads_dir.startswith("/"):
            logging.getLogger(__name__).warning(
                "uploads_dir è relativo: %s. Usa un percorso assoluto in produzione.",
                self.uploads_dir,
            )

        if self.debug:
            errors.append("- debug: deve essere False in produzione")

        for origin in self.cors_origins:
            if "localhost" in origin or "127.0.0.1" in origin:
                errors.append(
                    f"- cors_origins: l'origine '{origin}' non è consentita in produzione"
                )

        if errors:
            error_msg = "Errore di configurazione in produzione:\n" + "\n".join(errors)
            raise ValueError(error_msg)

        return self


@lru_cache()
def get_settings() -> Settings:
    """
    Restituisce l'istanza singleton delle impostazioni.

    In fase di test, usa get_settings.cache_clear() per resettare.

    Returns:
        Settings: Istanza delle impostazioni applicazione
    """
    return Settings()


# Istanza singleton delle impostazioni per uso diretto in modulo
settings = get_settings()
