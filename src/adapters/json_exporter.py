"""Exportación JSON del resultado de una operación.

Por qué JSON:
- Es el mismo formato (atributo -> valor) que el host entrega y espera.
- Permite encadenar la CLI con otras herramientas (jq, pipelines de CI).

Por qué pasar el `ResourceKind`:
- El documento lleva el `type_name` público y el estado completo según el
  esquema: los atributos que el servidor no devolvió quedan en null.
- Un fallo también se exporta: `state` es null y `diagnostics` explica por qué.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import LifecycleResult
from core.interfaces.resource import ResourceKind


def result_document(kind: ResourceKind, result: LifecycleResult) -> dict[str, Any]:
    state = None
    if result.state is not None:
        # Orden del esquema; atributos ausentes -> null.
        state = {name: result.state.get(name) for name in kind.schema.names()}

    return {
        "type_name": kind.schema.type_name,
        "operation": result.operation.value,
        "lifecycle": result.lifecycle.value if result.lifecycle is not None else None,
        "state": state,
        "diagnostics": [d.model_dump(mode="json") for d in result.diagnostics],
    }


def export_result_json(*, kind: ResourceKind, result: LifecycleResult, output_path: Path) -> Path:
    """Exporta el documento de `result` a JSON UTF-8."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(result_document(kind, result), ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return output_path
