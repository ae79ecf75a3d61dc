"""Exception types raised while building show configurations."""
from __future__ import annotations


class ShowConfigError(RuntimeError):
    """Base class for failures that abort a build or listing run."""


class TMDBError(ShowConfigError):
    """Raised when TMDB cannot be reached or returns an unusable response."""


class PreviousConfigError(ShowConfigError):
    """Raised when the previous configuration file cannot be read or parsed."""


class TimingLookupError(ShowConfigError):
    """Raised when a fetched episode has no timings in the previous configuration."""


class EpisodeAlignmentError(ShowConfigError):
    """Raised when per-language season responses list different episodes."""
