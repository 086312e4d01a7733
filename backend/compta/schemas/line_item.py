"""
Schemas Pydantic per le righe documento
Progetto: Compta Manager

Rappresentazione condivisa del contenuto fatturabile di preventivi e fatture:
lista ordinata di righe più i tre totali forniti dal chiamante.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from compta.core.exceptions import BusinessValidationError

# Tolleranza di arrotondamento per la verifica dei totali
TOTALS_TOLERANCE = Decimal("0.01")

JSON_SCALARS = (str, int, float, bool, type(None))


class LineItem(BaseModel):
    """
    Riga di un documento.

    Le chiavi non previste (es. riferimento alla prestazione di catalogo)
    sono conservate così come inviate dal frontend.
    """

    description: str = Field(default="", description="Descrizione della riga")
    quantity: Decimal = Field(..., ge=0, description="Quantità")
    unit_price: Decimal = Field(..., ge=0, description="Prezzo unitario HT")
    tax_rate: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        le=100,
        description="Aliquota TVA in percentuale",
    )
    amount: Optional[Decimal] = Field(
        default=None,
        description="Importo della riga (fornito dal chiamante)",
    )

    model_config = ConfigDict(extra="allow")

    # Valori così come inviati dal chiamante
    _raw: dict[str, Any] = PrivateAttr(default_factory=dict)

    @model_validator(mode="wrap")
    @classmethod
    def keep_raw_input(cls, data: Any, handler):
        item = handler(data)
        if isinstance(data, dict):
            item._raw = dict(data)
        return item

    def to_json(self) -> dict[str, Any]:
        """
        Riga pronta per la colonna JSON.

        Solo le chiavi fornite dal chiamante; numeri e stringhe JSON inviati
        restano nella loro forma originale, i Decimal costruiti in Python
        diventano stringhe senza perdita di cifre.
        """
        dumped = self.model_dump(mode="json", exclude_unset=True)
        for key, value in self._raw.items():
            if key in dumped and isinstance(value, JSON_SCALARS):
                dumped[key] = value
        return dumped


class DocumentTotals(BaseModel):
    """Totali di un documento, memorizzati senza ricalcolo."""

    total_ht: Decimal = Field(default=Decimal("0"), description="Totale imponibile")
    total_tva: Decimal = Field(default=Decimal("0"), description="Totale TVA")
    total_ttc: Decimal = Field(default=Decimal("0"), description="Totale TTC")


def dump_items(items: list[LineItem]) -> list[dict[str, Any]]:
    """Serializza le righe per la colonna JSON, nella forma in cui sono arrivate."""
    return [item.to_json() for item in items]


def verify_totals(
    items: list[LineItem],
    total_ht: Decimal,
    total_tva: Decimal,
    total_ttc: Decimal,
) -> None:
    """
    Verifica che i totali forniti siano coerenti con le righe.

    Usata solo se settings.verify_document_totals è attivo.
    Un'incoerenza è un rifiuto della scrittura, mai una correzione silenziosa.

    Raises:
        BusinessValidationError: totali non coerenti
    """
    expected_ht = sum((item.quantity * item.unit_price for item in items), Decimal("0"))
    if abs(expected_ht - total_ht) > TOTALS_TOLERANCE:
        raise BusinessValidationError(
            f"Il totale HT ({total_ht}) non corrisponde alle righe ({expected_ht})",
            extra={"expected_total_ht": str(expected_ht)},
        )
    if abs(total_ht + total_tva - total_ttc) > TOTALS_TOLERANCE:
        raise BusinessValidationError(
            f"Il totale TTC ({total_ttc}) deve essere HT + TVA ({total_ht + total_tva})",
        )
