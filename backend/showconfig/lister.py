"""Episode Lister: flat single-language list of a show's episodes."""
from __future__ import annotations

import asyncio
import logging

from .options import ListOptions
from .schemas import EpisodeEntry, EpisodeListing
from .tmdb import TMDBClient

logger = logging.getLogger(__name__)


async def list_episodes(client: TMDBClient, options: ListOptions) -> EpisodeListing:
    """Fetch every regular season at once and flatten their episodes."""

    show = await client.tv_info(options.tv_id)
    season_numbers = show.season_numbers()
    logger.info("Show %s has %d regular season(s)", options.tv_id, len(season_numbers))

    seasons = await asyncio.gather(
        *(client.season_info(options.tv_id, season_number) for season_number in season_numbers)
    )

    entries = [
        EpisodeEntry(
            name=episode.name,
            overview=episode.overview or "",
            season=season_number,
            episode=episode.episode_number,
        )
        for season_number, season in zip(season_numbers, seasons)
        for episode in season.episodes
    ]
    return EpisodeListing(entries=entries)
