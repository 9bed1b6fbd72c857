"""Exportación del veredicto de moderación a JSON.

Por qué un registro propio (y no solo la respuesta cruda):
- Guarda el texto evaluado y el modelo pedido junto al veredicto, para que el
  archivo sirva de evidencia sin depender del log de la CLI.
- Resume lo marcado (`flagged_categories`, `top_category`) por resultado.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import ModerationRequest, ModerationResponse


def build_verdict_record(*, request: ModerationRequest, response: ModerationResponse) -> dict[str, Any]:
    return {
        "input": request.input,
        "requested_model": request.model,
        "served_model": response.model,
        "id": response.id,
        "flagged": response.flagged,
        "results": [
            {
                "flagged": result.flagged,
                "flagged_categories": result.flagged_categories(),
                "top_category": result.top_category(),
                "category_scores": dict(sorted(result.category_scores.items())),
            }
            for result in response.results
        ],
    }


def export_verdict_json(
    *,
    request: ModerationRequest,
    response: ModerationResponse,
    output_path: Path,
) -> Path:
    """Escribe el registro del veredicto como JSON UTF-8."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    record = build_verdict_record(request=request, response=response)
    output_path.write_text(
        json.dumps(record, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return output_path
