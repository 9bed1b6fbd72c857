"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta del JSON que devuelve la API sin código de parseo manual.
- La misma clase define el formato en el cable (serialización) y el tipo que
  recibe quien llama.

Nota:
- Estos modelos describen *qué* se envía y recibe, no *cómo* viaja.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ModerationRequest(BaseModel):
    """Petición de moderación para un único texto.

    `model` vacío significa "usar el modelo por defecto del cliente".
    """

    model: str = Field(
        default="",
        description="Identificador del modelo; vacío = default del cliente.",
    )
    input: str = Field(
        ...,
        description="Texto a clasificar (se envía sin validar).",
    )

    def with_default_model(self, model: str) -> "ModerationRequest":
        """Devuelve una copia con `model` resuelto; nunca muta `self`."""

        if self.model:
            return self
        return self.model_copy(update={"model": model})


class ModerationResult(BaseModel):
    """Clasificación de un input.

    `categories` y `category_scores` deberían compartir claves; es contrato
    del servidor y no se valida aquí.
    """

    model_config = ConfigDict(extra="ignore")

    categories: dict[str, bool] = Field(
        default_factory=dict,
        description="Categoría -> marcada o no.",
    )
    category_scores: dict[str, float] = Field(
        default_factory=dict,
        description="Categoría -> confianza (0..1).",
    )
    flagged: bool = Field(
        default=False,
        description="Veredicto global de la API para el input.",
    )

    def flagged_categories(self) -> list[str]:
        return sorted(name for name, hit in self.categories.items() if hit)

    def top_category(self) -> str | None:
        if not self.category_scores:
            return None
        return max(self.category_scores, key=lambda name: self.category_scores[name])


class ModerationResponse(BaseModel):
    """Respuesta de la API de moderación."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(
        default="",
        description="Identificador de la moderación asignado por el servidor.",
    )
    model: str = Field(
        default="",
        description="Modelo que usó el servidor (eco).",
    )
    results: list[ModerationResult] = Field(
        default_factory=list,
        description="Resultados en el mismo orden que los inputs.",
    )

    @property
    def flagged(self) -> bool:
        return any(result.flagged for result in self.results)
