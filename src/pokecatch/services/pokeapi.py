"""PokeAPI client: the upstream Pokemon metadata service.

Learn: The upstream is opaque. Whatever goes wrong (DNS failure,
timeout, 404, 500, HTML instead of JSON), callers see the same
PokemonNotFound. The real cause goes to the log only.
"""

from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog

from pokecatch.config import Settings
from pokecatch.errors import PokemonNotFound

logger = structlog.get_logger()


class PokeApiClient:
    """Thin async wrapper around one shared httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PokeApiClient":
        return cls(
            base_url=settings.pokeapi_base_url,
            timeout=settings.pokeapi_timeout_seconds,
        )

    async def get_pokemon(self, name: str) -> dict[str, Any]:
        # "." and ".." survive quoting and would walk up the upstream path.
        if not name.strip("."):
            logger.info("pokeapi.rejected_name", name=name)
            raise PokemonNotFound()

        try:
            r = await self._client.get(f"/pokemon/{quote(name, safe='')}")
            r.raise_for_status()
            data = r.json()
        except httpx.HTTPStatusError as e:
            logger.info("pokeapi.not_found", name=name, status=e.response.status_code)
            raise PokemonNotFound()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("pokeapi.error", name=name, error_type=type(e).__name__)
            raise PokemonNotFound()

        if not isinstance(data, dict):
            logger.warning("pokeapi.unexpected_body", name=name)
            raise PokemonNotFound()
        return data

    async def aclose(self) -> None:
        await self._client.aclose()
