"""Contrato de un moderador de texto.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir el cliente HTTP por un doble de pruebas en quien lo use.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ModerationRequest, ModerationResponse


@runtime_checkable
class Moderator(Protocol):
    """Contrato mínimo para clasificar un texto.

    Reglas de diseño:
    - `create` es asíncrono porque hace I/O (HTTP) y debe poder cancelarse.
    - Devuelve la respuesta completa o lanza `ModerationError`; nunca parcial.
    """

    async def create(
        self,
        request: ModerationRequest,
        *,
        timeout: float | None = None,
    ) -> ModerationResponse:
        """Clasifica `request.input` y devuelve la respuesta tipada."""

        ...
