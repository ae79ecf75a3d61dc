"""Pydantic models for TMDB payloads and the documents produced by the tools."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer


# ----------------------------------------------------------------------
# TMDB responses


class SeasonSummary(BaseModel):
    """Season entry embedded in the TV details payload."""

    season_number: int


class ShowInfo(BaseModel):
    """Subset of ``/tv/{id}`` used by the tools."""

    id: int | None = None
    name: str = Field(default="", description="Display name in the requested language.")
    original_name: str = Field(default="")
    original_language: str | None = Field(default=None)
    seasons: list[SeasonSummary] = Field(default_factory=list)

    def season_numbers(self) -> list[int]:
        """Return regular season numbers in ascending order, specials excluded."""

        return sorted(season.season_number for season in self.seasons if season.season_number >= 1)


class EpisodeInfo(BaseModel):
    """Episode entry embedded in the season details payload."""

    episode_number: int
    name: str = Field(default="")
    overview: str | None = Field(default=None)


class SeasonInfo(BaseModel):
    """Subset of ``/tv/{id}/season/{season_number}`` used by the tools."""

    season_number: int
    episodes: list[EpisodeInfo] = Field(default_factory=list)


# ----------------------------------------------------------------------
# Previous configuration (read-only input)


class PreviousEpisode(BaseModel):
    """Episode entry of a previously generated configuration."""

    season_number: int
    episode_number: int
    timings: Any = None


class PreviousConfig(BaseModel):
    """Previously generated configuration holding timing data."""

    model_config = ConfigDict(populate_by_name=True)

    common_timings: Any = Field(default=None, alias="commonTimings")
    episodes: list[PreviousEpisode] = Field(default_factory=list)

    def timings_for(self, season_number: int, episode_number: int) -> Any:
        """Return the timings recorded for an episode.

        Raises ``KeyError`` when the episode is not part of the configuration so
        callers can decide how to report the miss.
        """

        for episode in self.episodes:
            if episode.season_number == season_number and episode.episode_number == episode_number:
                return episode.timings
        raise KeyError((season_number, episode_number))


# ----------------------------------------------------------------------
# Config Builder output


class LanguageName(BaseModel):
    """Show name translated into one requested language."""

    name: str
    language: str


class ShowName(BaseModel):
    """Original show name with its per-language translations."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    per_language: list[LanguageName] = Field(default_factory=list, alias="perLanguage")


class EpisodeTranslation(BaseModel):
    """Episode name and optional overview in one language."""

    language: str
    name: str
    overview: str | None = None

    @model_serializer(mode="wrap")
    def _omit_missing_overview(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        if self.overview is None:
            data.pop("overview", None)
        return data


class ConfigEpisode(BaseModel):
    """Episode entry of the generated configuration."""

    model_config = ConfigDict(populate_by_name=True)

    season_number: int
    episode_number: int
    per_language: list[EpisodeTranslation] = Field(default_factory=list, alias="perLanguage")
    timings: Any = None


class OutputConfig(BaseModel):
    """Configuration document produced by the builder."""

    model_config = ConfigDict(populate_by_name=True)

    name: ShowName
    default_language: str | None = Field(default=None, alias="defaultLanguage")
    episodes: list[ConfigEpisode] = Field(default_factory=list)
    common_timings: Any = Field(default=None, alias="commonTimings")

    @model_serializer(mode="wrap")
    def _omit_missing_default_language(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        if self.default_language is None:
            data.pop("defaultLanguage", None)
            data.pop("default_language", None)
        return data

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready document using the published key names."""

        return self.model_dump(mode="json", by_alias=True)


# ----------------------------------------------------------------------
# Episode Lister output


class EpisodeEntry(BaseModel):
    """Flat episode record emitted by the lister."""

    name: str
    overview: str
    season: int
    episode: int


class EpisodeListing(BaseModel):
    """Document produced by the episode lister."""

    entries: list[EpisodeEntry] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready document."""

        return self.model_dump(mode="json")
