"""Build show configurations and episode lists from TMDB metadata."""

from .builder import build_config, merge_season
from .errors import (
    EpisodeAlignmentError,
    PreviousConfigError,
    ShowConfigError,
    TimingLookupError,
    TMDBError,
)
from .lister import list_episodes
from .options import BuildOptions, ListOptions, flatten_languages
from .settings import ShowConfigSettings
from .tmdb import TMDBClient

__all__ = [
    "BuildOptions",
    "EpisodeAlignmentError",
    "ListOptions",
    "PreviousConfigError",
    "ShowConfigError",
    "ShowConfigSettings",
    "TMDBClient",
    "TMDBError",
    "TimingLookupError",
    "build_config",
    "flatten_languages",
    "list_episodes",
    "merge_season",
]
