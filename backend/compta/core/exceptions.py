"""
Eccezioni Custom per l'applicazione.
Progetto: Compta Manager

Definisce eccezioni specifiche del dominio per una gestione
centralizzata degli errori. Ogni eccezione porta un error_code stabile
che il frontend può usare al posto del messaggio leggibile.

NOTA: BusinessValidationError è volutamente distinta da pydantic.ValidationError.
- pydantic.ValidationError: errori di formato/tipo nei dati di input (gestiti da FastAPI → 422)
- BusinessValidationError: violazioni delle regole di business logic (gestiti dal nostro handler → 422)
"""

from typing import Any, Dict, Optional

__all__ = [
    "AppException",
    "NotFoundError",
    "ConflictError",
    "DuplicateError",
    "ForbiddenError",
    "BusinessValidationError",
    "ValidationError",       # alias di BusinessValidationError
    "StorageError",
]


class AppException(Exception):
    """
    Base exception per l'applicazione.

    Tutte le eccezioni custom ereditano da questa classe base.

    Attributes:
        status_code: HTTP status code da restituire al client
        error_code: Identificativo univoco dell'errore per il frontend
        detail: Messaggio di errore leggibile per l'utente
        extra: Dizionario con dati aggiuntivi per il frontend
    """

    status_code: int = 500
    error_code: str = "INTERNAL_SERVER_ERROR"
    default_detail: str = "Errore interno"

    def __init__(
        self,
        detail: Optional[str] = None,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Inizializza l'eccezione.

        Args:
            detail: Messaggio di errore dettagliato (default: quello di classe)
            error_code: Identificativo univoco (default: quello di classe)
            extra: Dati aggiuntivi da passare al frontend (default: None)
        """
        self.detail = detail if detail is not None else self.default_detail
        self.error_code = error_code if error_code is not None else self.error_code
        self.extra = extra
        self.status_code = self.__class__.status_code
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Corpo JSON della risposta di errore."""
        body: Dict[str, Any] = {"detail": self.detail, "error_code": self.error_code}
        if self.extra:
            body["extra"] = self.extra
        return body


class NotFoundError(AppException):
    """
    Eccezione sollevata quando una risorsa non viene trovata.

    Utilizzata quando un'entità cercata non esiste nel database.
    """

    status_code: int = 404
    error_code: str = "RESOURCE_NOT_FOUND"
    default_detail: str = "Risorsa non trovata"


class ConflictError(AppException):
    """
    Eccezione sollevata per violazioni di unicità o conflitti di stato.

    Esempi:
        - "Una fattura esiste già per questo preventivo"
        - "Il cliente è ancora referenziato da documenti"
    """

    status_code: int = 409
    error_code: str = "CONFLICT_STATE"
    default_detail: str = "Conflitto di stato"


class DuplicateError(ConflictError):
    """
    Eccezione sollevata quando si tenta di creare una risorsa duplicata.

    Utilizzata per violazioni di vincoli unique sul numero documento.
    """

    error_code: str = "DUPLICATE_RESOURCE"
    default_detail: str = "Risorsa già esistente"


class ForbiddenError(AppException):
    """
    Eccezione sollevata quando una mutazione viola un invariante di immutabilità.

    Esempi di utilizzo:
        - "Impossibile modificare una fattura emessa. Creare un avoir."
        - "Impossibile eliminare una fattura emessa."
    """

    status_code: int = 403
    error_code: str = "FORBIDDEN"
    default_detail: str = "Operazione non consentita"


class BusinessValidationError(ValueError, AppException):
    """
    Eccezione sollevata per violazioni delle regole di business logic.

    Eredita da ValueError per essere catturata dai validatori Pydantic.

    NON confondere con pydantic.ValidationError che gestisce
    la validazione dello schema/formato dei dati in input.

    Esempi di utilizzo:
        - "La quantità di una riga non può essere negativa"
        - "Il totale HT non corrisponde alle righe"
    """

    status_code: int = 422
    error_code: str = "BUSINESS_VALIDATION_ERROR"
    default_detail: str = "Validazione dati fallita"

    def __init__(
        self,
        detail: Optional[str] = None,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        # Chiama AppException.__init__ direttamente per evitare ValueError
        AppException.__init__(self, detail, error_code, extra)


# Alias per compatibilità
ValidationError = BusinessValidationError


class StorageError(AppException):
    """
    Eccezione sollevata per errori di persistenza non legati a vincoli.

    La transazione in corso viene sempre annullata prima di sollevarla.
    """

    status_code: int = 500
    error_code: str = "STORAGE_FAILURE"
    default_detail: str = "Errore del database"
