"""Sesión HTTP autenticada (JSON sobre HTTPS).

Responsabilidad:
- Serializar un payload Pydantic a JSON y enviarlo por POST con `Bearer`.
- Exigir status 200 y validar el cuerpo contra el tipo de resultado pedido.
- Traducir cada fallo a su `ModerationError` concreto, conservando la causa.

Sin reintentos: un fallo se propaga tal cual a quien llama.
"""

from __future__ import annotations

import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import (
    DecodeError,
    RequestBuildError,
    SerializationError,
    StatusError,
    TransportError,
)

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

_ALLOWED_SCHEMES = ("http", "https")


def _parse_url(url: str) -> httpx.URL:
    try:
        target = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise RequestBuildError(f"failed to create request: {exc}", {"url": url}) from exc
    if target.scheme not in _ALLOWED_SCHEMES or not target.host:
        raise RequestBuildError(
            f"failed to create request: not an absolute http(s) URL: {url!r}",
            {"url": url},
        )
    return target


class Session:
    """Credencial + intercambio HTTP genérico.

    Se construye una vez y es de solo lectura: varias instancias de
    `ModerationClient` pueden compartir la misma `Session` en paralelo.

    Si no se inyecta `http_client`, cada petición abre y cierra un cliente
    efímero (ver `build_async_client`). Si se inyecta, su ciclo de vida es
    responsabilidad de quien lo creó.
    """

    def __init__(
        self,
        api_key: str,
        *,
        settings: AppSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._settings = settings or AppSettings()
        self._http_client = http_client

    @property
    def api_key(self) -> str:
        return self._api_key

    def __repr__(self) -> str:
        # Nunca exponer la key en logs/tracebacks.
        return f"Session(api_key='***', shared_client={self._http_client is not None})"

    async def make_request(
        self,
        url: str,
        payload: BaseModel,
        result_type: type[ResultT],
        *,
        timeout: float | None = None,
    ) -> ResultT:
        """POST de `payload` a `url` y decodifica la respuesta como `result_type`.

        Errores (todos `ModerationError`, causa en `__cause__`):
        - `SerializationError`: el payload no se puede pasar a JSON.
        - `RequestBuildError`: URL mal formada o sin esquema http(s).
        - `TransportError`: DNS/TLS/conexión/timeout o bucle de redirecciones.
        - `StatusError`: cualquier status != 200 (`status_code` disponible).
        - `DecodeError`: cuerpo no JSON, con forma inesperada o mal comprimido.

        La cancelación de la tarea (`asyncio.CancelledError`) no se envuelve:
        aborta la petición en curso y se propaga.
        """

        try:
            body = payload.model_dump_json().encode("utf-8")
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise SerializationError(f"failed to marshal payload: {exc}") from exc

        target = _parse_url(url)

        if self._http_client is not None:
            return await self._exchange(self._http_client, target, body, result_type, timeout)

        async with build_async_client(self._settings) as client:
            return await self._exchange(client, target, body, result_type, timeout)

    async def _exchange(
        self,
        client: httpx.AsyncClient,
        target: httpx.URL,
        body: bytes,
        result_type: type[ResultT],
        timeout: float | None,
    ) -> ResultT:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }
        try:
            request = client.build_request(
                "POST",
                target,
                content=body,
                headers=headers,
                timeout=httpx.Timeout(timeout) if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise RequestBuildError(f"failed to create request: {exc}", {"url": str(target)}) from exc

        logger.debug("POST %s (%d bytes)", target, len(body))
        try:
            response = await client.send(request, stream=True)
        except httpx.RequestError as exc:
            # TooManyRedirects no hereda de TransportError.
            raise TransportError(f"request failed: {exc}", {"url": str(target)}) from exc

        try:
            logger.debug("POST %s -> %s", target, response.status_code)
            if response.status_code != httpx.codes.OK:
                raise StatusError(response.status_code, {"url": str(target)})

            try:
                raw = await response.aread()
            except httpx.DecodingError as exc:
                raise DecodeError(f"failed to decode response body: {exc}", {"url": str(target)}) from exc
            except httpx.RequestError as exc:
                raise TransportError(f"reading response failed: {exc}", {"url": str(target)}) from exc

            try:
                return result_type.model_validate_json(raw)
            except ValidationError as exc:
                raise DecodeError(
                    f"failed to decode response: {exc.error_count()} error(s)",
                    {"url": str(target), "errors": exc.errors(include_url=False)},
                ) from exc
        finally:
            await response.aclose()
