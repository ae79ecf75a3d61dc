"""Asynchronous TMDB client used by the builder and the episode lister."""
from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .errors import TMDBError
from .schemas import SeasonInfo, ShowInfo

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class TMDBClient:
    """Thin wrapper over an ``httpx.AsyncClient`` pointed at the TMDB v3 API."""

    def __init__(self, http: httpx.AsyncClient, api_key: str) -> None:
        self._http = http
        self._api_key = api_key

    async def tv_info(self, tv_id: str, *, language: str | None = None) -> ShowInfo:
        """Fetch the TV details for ``tv_id``."""

        return await self._get(f"tv/{tv_id}", ShowInfo, language=language)

    async def season_info(
        self, tv_id: str, season_number: int, *, language: str | None = None
    ) -> SeasonInfo:
        """Fetch one season of ``tv_id`` including its episode list."""

        return await self._get(f"tv/{tv_id}/season/{season_number}", SeasonInfo, language=language)

    async def _get(self, path: str, model: type[ModelT], *, language: str | None) -> ModelT:
        params: dict[str, str] = {"api_key": self._api_key}
        if language is not None:
            params["language"] = language

        logger.info("GET %s (language=%s)", path, language or "default")
        try:
            response = await self._http.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TMDBError(
                f"TMDB responded with HTTP {exc.response.status_code} for {path}: "
                f"{_status_message(exc.response)}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TMDBError(f"Failed to contact TMDB for {path}: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise TMDBError(f"TMDB returned invalid JSON for {path}") from exc

        if not isinstance(payload, dict):
            raise TMDBError(f"TMDB response for {path} must be an object")

        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise TMDBError(f"Unexpected TMDB payload for {path}: {exc}") from exc


def _status_message(response: httpx.Response) -> str:
    try:
        body: Any = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(body, dict) and body.get("status_message"):
        return str(body["status_message"])
    return response.reason_phrase
