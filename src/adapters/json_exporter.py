"""Exportación JSON de registros.

Por qué JSON por clave externa:
- El archivo exportado tiene la misma forma que la respuesta de la API, así
  que se puede volver a cargar con `from_json`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.mapping import JsonRecord


def export_records_json(*, records: JsonRecord | Iterable[JsonRecord], output_path: Path) -> Path:
    """Exporta un registro (objeto) o varios (array) a JSON UTF-8 con formato estable."""

    if isinstance(records, JsonRecord):
        payload: object = records.to_json()
    else:
        payload = [record.to_json() for record in records]
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
