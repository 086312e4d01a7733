"""
Funzioni di supporto comuni a preventivi e fatture
Progetto: Compta Manager

Traduce uno schema di aggiornamento parziale nei valori di colonna da scrivere
e confronta tali valori con lo stato persistito.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel

from compta.schemas.line_item import LineItem, dump_items, verify_totals

TOTAL_FIELDS = ("total_ht", "total_tva", "total_ttc")


def supplied_values(data: BaseModel) -> dict[str, Any]:
    """
    Valori effettivamente forniti dal chiamante, nel formato delle colonne.

    I campi omessi o null sono esclusi: un aggiornamento parziale non
    azzera mai una colonna.
    """
    values: dict[str, Any] = {}
    for name in data.model_fields_set:
        value = getattr(data, name)
        if value is None:
            continue
        if name == "items":
            value = dump_items(value)
        elif isinstance(value, Enum):
            value = value.value
        elif isinstance(value, datetime.datetime) and value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc)
        values[name] = value
    return values


def _comparable(value: Any) -> Any:
    """I datetime naive letti da SQLite sono in UTC."""
    if isinstance(value, datetime.datetime) and value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value


def changed_values(instance: Any, values: dict[str, Any]) -> dict[str, Any]:
    """Sottoinsieme di values che differisce dallo stato attuale di instance."""
    return {
        name: value
        for name, value in values.items()
        if _comparable(getattr(instance, name)) != _comparable(value)
    }


def verify_document_totals(instance: Any, changes: dict[str, Any]) -> None:
    """
    Verifica i totali risultanti dall'applicazione di changes a instance.

    Raises:
        BusinessValidationError: totali non coerenti con le righe
    """
    raw_items = changes.get("items", instance.items) or []
    items = [LineItem.model_validate(item) for item in raw_items]
    totals = [Decimal(str(changes.get(name, getattr(instance, name)))) for name in TOTAL_FIELDS]
    verify_totals(items, *totals)
