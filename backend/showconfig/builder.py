"""Config Builder: multilingual show metadata merged with previous timings."""
from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from .errors import EpisodeAlignmentError, TimingLookupError
from .limiter import ConcurrencyLimiter
from .options import BuildOptions
from .schemas import (
    ConfigEpisode,
    EpisodeTranslation,
    LanguageName,
    OutputConfig,
    PreviousConfig,
    SeasonInfo,
    ShowInfo,
    ShowName,
)
from .tmdb import TMDBClient

logger = logging.getLogger(__name__)


async def build_config(
    client: TMDBClient, options: BuildOptions, previous: PreviousConfig
) -> OutputConfig:
    """Fetch every requested language of the show and assemble the configuration."""

    languages = list(options.languages)
    limiter = ConcurrencyLimiter(options.rate_limit)

    show_infos: list[ShowInfo] = await asyncio.gather(
        *(
            limiter.run(lambda language=language: client.tv_info(options.tv_id, language=language))
            for language in languages
        )
    )
    primary = show_infos[0]
    season_numbers = primary.season_numbers()
    logger.info(
        "Show %s has %d regular season(s); fetching %d language(s) with rate limit %d",
        options.tv_id,
        len(season_numbers),
        len(languages),
        options.rate_limit,
    )

    season_infos = await asyncio.gather(
        *(
            _fetch_season(client, limiter, options.tv_id, season_number, languages)
            for season_number in season_numbers
        )
    )

    episodes: list[ConfigEpisode] = []
    for season_number, per_language in zip(season_numbers, season_infos):
        episodes.extend(merge_season(season_number, languages, per_language, previous))

    default_language = primary.original_language
    if default_language not in languages:
        default_language = None

    return OutputConfig(
        name=ShowName(
            name=primary.original_name,
            per_language=[
                LanguageName(name=info.name, language=language)
                for info, language in zip(show_infos, languages)
            ],
        ),
        default_language=default_language,
        episodes=episodes,
        common_timings=previous.common_timings,
    )


async def _fetch_season(
    client: TMDBClient,
    limiter: ConcurrencyLimiter,
    tv_id: str,
    season_number: int,
    languages: Sequence[str],
) -> list[SeasonInfo]:
    return await asyncio.gather(
        *(
            limiter.run(
                lambda language=language: client.season_info(tv_id, season_number, language=language)
            )
            for language in languages
        )
    )


def merge_season(
    season_number: int,
    languages: Sequence[str],
    per_language: Sequence[SeasonInfo],
    previous: PreviousConfig,
) -> list[ConfigEpisode]:
    """Merge one season's per-language responses into configuration episodes.

    ``per_language[i]`` must be the response for ``languages[i]``. Episodes are
    paired by position and every language must list the same episode numbers.
    """

    reference = per_language[0].episodes
    for language, season in zip(languages, per_language):
        numbers = [episode.episode_number for episode in season.episodes]
        if numbers != [episode.episode_number for episode in reference]:
            raise EpisodeAlignmentError(
                f"Season {season_number} in language {language!r} lists episodes {numbers}, "
                f"expected {[episode.episode_number for episode in reference]}"
            )

    merged: list[ConfigEpisode] = []
    for index, episode in enumerate(reference):
        translations = []
        for language, season in zip(languages, per_language):
            source = season.episodes[index]
            translations.append(
                EpisodeTranslation(
                    language=language,
                    name=source.name,
                    overview=source.overview or None,
                )
            )

        try:
            timings = previous.timings_for(season_number, episode.episode_number)
        except KeyError as exc:
            raise TimingLookupError(
                f"No timings for season {season_number} episode {episode.episode_number} "
                "in the existing config"
            ) from exc

        merged.append(
            ConfigEpisode(
                season_number=season_number,
                episode_number=episode.episode_number,
                per_language=translations,
                timings=timings,
            )
        )
    return merged
