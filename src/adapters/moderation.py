"""Cliente de la API de moderación.

Responsabilidad:
- Atar una `Session` a un endpoint y a un modelo por defecto.
- Exponer `create`, la única operación de dominio.
"""

from __future__ import annotations

import httpx

from adapters.session import Session
from core.config import DEFAULT_CREATE_ENDPOINT, AppSettings
from core.domain.errors import ConfigurationError
from core.domain.models import ModerationRequest, ModerationResponse
from core.interfaces.moderator import Moderator


class ModerationClient(Moderator):
    """Clasifica textos contra `create_endpoint`.

    `create_endpoint` se puede reasignar tras construir el cliente (dobles de
    prueba, despliegues alternativos). El resto es de solo lectura.
    """

    def __init__(
        self,
        session: Session,
        model: str,
        *,
        create_endpoint: str = DEFAULT_CREATE_ENDPOINT,
    ) -> None:
        self._session = session
        self._model = model
        self.create_endpoint = create_endpoint

    @property
    def model(self) -> str:
        return self._model

    @property
    def session(self) -> Session:
        return self._session

    async def create(
        self,
        request: ModerationRequest,
        *,
        timeout: float | None = None,
    ) -> ModerationResponse:
        payload = request.with_default_model(self._model)
        return await self._session.make_request(
            self.create_endpoint,
            payload,
            ModerationResponse,
            timeout=timeout,
        )


def new_client(session: Session, model: str) -> ModerationClient:
    """Factory: cliente con el endpoint por defecto."""

    return ModerationClient(session, model)


def build_moderation_client(
    settings: AppSettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> ModerationClient:
    """Construye `Session` + `ModerationClient` a partir de `AppSettings`.

    Lanza `ConfigurationError` si no hay API key configurada.
    """

    settings = settings or AppSettings()
    if not settings.api_key:
        raise ConfigurationError(
            "No API key configured (set MODERATION_API_KEY or run `doctor setup`).",
        )

    session = Session(settings.api_key, settings=settings, http_client=http_client)
    client = new_client(session, settings.default_model)
    client.create_endpoint = settings.create_endpoint
    return client
