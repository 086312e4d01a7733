"""
Service Layer per gli allegati
Progetto: Compta Manager

Salva su disco le ricevute inviate dal frontend come data URI base64
e restituisce il riferimento pubblico sotto /uploads.
"""

import base64
import binascii
import logging
import re
import uuid
from pathlib import Path
from typing import Optional

from compta.core.config import settings
from compta.core.exceptions import BusinessValidationError, StorageError

# Logger per questo modulo
logger = logging.getLogger(__name__)

# data:<mime>;base64,<payload>
DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "application/pdf": "pdf",
}

PUBLIC_PREFIX = "/uploads"


class AttachmentService:
    """
    Archivio degli allegati su filesystem locale.

    Args:
        uploads_dir: Directory di destinazione (default: settings.uploads_dir)
        max_bytes: Dimensione massima del file decodificato
    """

    def __init__(
        self,
        uploads_dir: Optional[str] = None,
        max_bytes: Optional[int] = None,
    ) -> None:
        self.uploads_dir = Path(uploads_dir or settings.uploads_dir)
        self.max_bytes = max_bytes if max_bytes is not None else settings.max_upload_bytes

    @staticmethod
    def is_data_uri(value: Optional[str]) -> bool:
        return bool(value) and value.startswith("data:")

    def save(self, value: str) -> str:
        """
        Salva un data URI e restituisce il percorso pubblico del file.

        Una stringa che non è un data URI è già un riferimento opaco
        e viene restituita invariata.

        Raises:
            BusinessValidationError: base64 corrotto o file troppo grande
            StorageError: Scrittura su disco fallita
        """
        match = DATA_URI_PATTERN.match(value) if self.is_data_uri(value) else None
        if match is None:
            return value

        try:
            content = base64.b64decode(match.group("payload"), validate=True)
        except (binascii.Error, ValueError):
            raise BusinessValidationError("Allegato non valido: contenuto base64 corrotto")

        if len(content) > self.max_bytes:
            logger.warning("Allegato rifiutato: %s byte oltre il limite di %s", len(content), self.max_bytes)
            raise BusinessValidationError(
                "Allegato troppo grande",
                extra={"max_bytes": self.max_bytes},
            )

        extension = EXTENSIONS.get(match.group("mime").lower(), "bin")
        filename = f"receipt_{uuid.uuid4().hex}.{extension}"

        try:
            self.uploads_dir.mkdir(parents=True, exist_ok=True)
            (self.uploads_dir / filename).write_bytes(content)
        except OSError as e:
            logger.error("Scrittura allegato %s fallita: %s", filename, e)
            raise StorageError("Impossibile salvare l'allegato")

        logger.info("Salvato allegato %s (%s byte)", filename, len(content))
        return f"{PUBLIC_PREFIX}/{filename}"
