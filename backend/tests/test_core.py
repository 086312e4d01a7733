"""
Tests for configuration and the exception hierarchy.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from compta.core.config import Settings
from compta.core.exceptions import (
    AppException,
    BusinessValidationError,
    ConflictError,
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    StorageError,
    ValidationError,
)


# ============================================================
# Tests for exceptions
# ============================================================


class TestExceptions:
    """Gerarchia e serializzazione degli errori."""

    @pytest.mark.parametrize(
        "exc_class, status_code, error_code",
        [
            (NotFoundError, 404, "RESOURCE_NOT_FOUND"),
            (ConflictError, 409, "CONFLICT_STATE"),
            (DuplicateError, 409, "DUPLICATE_RESOURCE"),
            (ForbiddenError, 403, "FORBIDDEN"),
            (BusinessValidationError, 422, "BUSINESS_VALIDATION_ERROR"),
            (StorageError, 500, "STORAGE_FAILURE"),
        ],
    )
    def test_status_and_code(self, exc_class, status_code, error_code):
        exc = exc_class("boom")

        assert isinstance(exc, AppException)
        assert exc.status_code == status_code
        assert exc.to_dict() == {"detail": "boom", "error_code": error_code}

    def test_duplicate_is_a_conflict(self):
        assert issubclass(DuplicateError, ConflictError)

    def test_extra_included_when_present(self):
        exc = ForbiddenError("no", extra={"fields": ["items"]})

        assert exc.to_dict()["extra"] == {"fields": ["items"]}

    def test_default_detail(self):
        assert NotFoundError().detail == "Risorsa non trovata"

    def test_validation_alias(self):
        """Test alias compatibile, catturabile anche come ValueError."""
        assert ValidationError is BusinessValidationError
        with pytest.raises(ValueError):
            raise BusinessValidationError("bad")


# ============================================================
# Tests for Settings
# ============================================================


class TestSettings:
    """Validazione della configurazione."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.is_sqlite
        assert not settings.is_production
        assert settings.audit_default_actor == "system"
        assert settings.verify_document_totals is False

    def test_production_rejects_debug_and_localhost(self):
        with pytest.raises(PydanticValidationError) as exc_info:
            Settings(
                _env_file=None,
                app_env="production",
                debug=True,
                cors_origins=["http://localhost:3000"],
            )

        message = str(exc_info.value)
        assert "debug" in message
        assert "localhost" in message

    def test_production_rejects_placeholder_credentials(self):
        with pytest.raises(PydanticValidationError):
            Settings(
                _env_file=None,
                app_env="production",
                database_url="postgresql+asyncpg://compta:changeme@db/compta",
                cors_origins=["https://compta.example.com"],
            )

    def test_valid_production(self):
        settings = Settings(
            _env_file=None,
            app_env="production",
            database_url="postgresql+asyncpg://compta:s3cret@db/compta",
            cors_origins=["https://compta.example.com"],
            uploads_dir="/var/lib/compta/uploads",
        )

        assert settings.is_production
        assert not settings.is_sqlite

    def test_blank_actor_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, audit_default_actor="   ")
