"""Tests for the Config Builder fetch orchestration and merge."""
from __future__ import annotations

import copy
from pathlib import Path

import pytest

from backend.showconfig import (
    BuildOptions,
    EpisodeAlignmentError,
    TimingLookupError,
    build_config,
    merge_season,
)
from backend.showconfig.schemas import PreviousConfig, SeasonInfo
from backend.tests.fake_tmdb import (
    PREVIOUS_CONFIG,
    SEASON_EPISODES,
    TV_ID,
    FakeTMDB,
    run_with_client,
)


def _options(*languages: str, rate_limit: int = 1) -> BuildOptions:
    return BuildOptions(
        api_key="test-key",
        tv_id=TV_ID,
        existing_config=Path("previous.json"),
        languages=languages or ("en",),
        rate_limit=rate_limit,
    )


def _previous(payload: dict | None = None) -> PreviousConfig:
    return PreviousConfig.model_validate(payload or PREVIOUS_CONFIG)


def _build(fake: FakeTMDB, options: BuildOptions, previous: PreviousConfig | None = None) -> dict:
    config = run_with_client(fake, options.api_key, build_config, options, previous or _previous())
    return config.to_document()


def test_build_merges_languages_and_timings(fake_tmdb: FakeTMDB) -> None:
    """Two languages for a two-season show should yield one entry per episode."""

    document = _build(fake_tmdb, _options("en", "fr"))

    assert document["name"] == {
        "name": "Game of Thrones",
        "perLanguage": [
            {"name": "Game of Thrones", "language": "en"},
            {"name": "Le Trône de fer", "language": "fr"},
        ],
    }
    assert [(e["season_number"], e["episode_number"]) for e in document["episodes"]] == [
        (1, 1),
        (1, 2),
        (2, 1),
    ]
    first = document["episodes"][0]
    assert first["perLanguage"] == [
        {"language": "en", "name": "Winter Is Coming", "overview": "Ned is summoned."},
        {"language": "fr", "name": "L'hiver vient", "overview": "Ned est convoqué."},
    ]
    assert document["commonTimings"] == PREVIOUS_CONFIG["commonTimings"]


def test_build_copies_timings_for_every_episode(fake_tmdb: FakeTMDB) -> None:
    """Each episode's timings should equal the previous config's entry."""

    document = _build(fake_tmdb, _options("en", "fr", "de"))

    expected = {
        (e["season_number"], e["episode_number"]): e["timings"] for e in PREVIOUS_CONFIG["episodes"]
    }
    fixture_count = sum(len(SEASON_EPISODES[season]["en"]) for season in (1, 2))
    assert len(document["episodes"]) == fixture_count
    for episode in document["episodes"]:
        assert episode["timings"] == expected[(episode["season_number"], episode["episode_number"])]

    # Opaque values keep their nulls.
    assert document["episodes"][1]["timings"] == {"recap": [0, 60], "skip": None}
    assert document["commonTimings"]["credits"] is None


def test_build_keeps_requested_language_order(fake_tmdb: FakeTMDB) -> None:
    document = _build(fake_tmdb, _options("fr", "en"))

    assert [item["language"] for item in document["name"]["perLanguage"]] == ["fr", "en"]
    for episode in document["episodes"]:
        assert [item["language"] for item in episode["perLanguage"]] == ["fr", "en"]


def test_build_excludes_specials(fake_tmdb: FakeTMDB) -> None:
    """Season 0 should be neither fetched nor emitted."""

    document = _build(fake_tmdb, _options("en", "fr"))

    assert all(episode["season_number"] != 0 for episode in document["episodes"])
    assert all(season != 0 for season, _ in fake_tmdb.season_requests())


def test_build_fetches_each_season_once_per_language(fake_tmdb: FakeTMDB) -> None:
    _build(fake_tmdb, _options("en", "fr"))

    assert sorted(fake_tmdb.season_requests()) == [(1, "en"), (1, "fr"), (2, "en"), (2, "fr")]
    show_requests = [language for path, language in fake_tmdb.requests if "season" not in path]
    assert sorted(show_requests) == ["en", "fr"]


def test_build_omits_missing_overviews(fake_tmdb: FakeTMDB) -> None:
    """Empty and absent overviews should drop the key entirely."""

    document = _build(fake_tmdb, _options("en", "fr", "de"))

    second = document["episodes"][1]
    assert second["perLanguage"] == [
        {"language": "en", "name": "The Kingsroad"},
        {"language": "fr", "name": "La route royale"},
        {"language": "de", "name": "Der Königsweg"},
    ]


@pytest.mark.parametrize(
    ("original_language", "languages", "expected"),
    [
        ("en", ("en", "fr"), "en"),
        ("fr", ("en", "fr"), "fr"),
        ("ja", ("en", "fr"), None),
        ("en", ("fr",), None),
    ],
)
def test_build_default_language_requires_membership(
    original_language: str, languages: tuple[str, ...], expected: str | None
) -> None:
    fake = FakeTMDB(original_language=original_language)

    document = _build(fake, _options(*languages))

    if expected is None:
        assert "defaultLanguage" not in document
    else:
        assert document["defaultLanguage"] == expected


def test_build_output_key_order(fake_tmdb: FakeTMDB) -> None:
    document = _build(fake_tmdb, _options("en"))

    assert list(document) == ["name", "defaultLanguage", "episodes", "commonTimings"]
    assert list(document["episodes"][0]) == [
        "season_number",
        "episode_number",
        "perLanguage",
        "timings",
    ]


def test_build_fails_when_previous_config_lacks_episode(fake_tmdb: FakeTMDB) -> None:
    """A fetched episode without timings must abort rather than emit null timings."""

    payload = copy.deepcopy(PREVIOUS_CONFIG)
    payload["episodes"] = [
        episode for episode in payload["episodes"] if episode["season_number"] != 2
    ]

    with pytest.raises(TimingLookupError, match="season 2 episode 1"):
        _build(fake_tmdb, _options("en"), _previous(payload))


def test_build_rejects_misaligned_language_responses() -> None:
    seasons = copy.deepcopy(SEASON_EPISODES)
    seasons[1]["fr"] = list(reversed(seasons[1]["fr"]))
    fake = FakeTMDB(seasons=seasons)

    with pytest.raises(EpisodeAlignmentError, match="Season 1"):
        _build(fake, _options("en", "fr"))


def test_build_default_rate_limit_serialises_requests() -> None:
    fake = FakeTMDB(delay=0.01)

    _build(fake, _options("en", "fr", "de"))

    assert fake.peak == 1


def test_build_rate_limit_caps_in_flight_requests() -> None:
    fake = FakeTMDB(delay=0.01)

    _build(fake, _options("en", "fr", "de", rate_limit=2))

    assert fake.peak == 2


def test_merge_season_pairs_episodes_by_position() -> None:
    per_language = [
        SeasonInfo.model_validate({"season_number": 1, "episodes": SEASON_EPISODES[1]["en"]}),
        SeasonInfo.model_validate({"season_number": 1, "episodes": SEASON_EPISODES[1]["de"]}),
    ]

    merged = merge_season(1, ["en", "de"], per_language, _previous())

    assert [episode.episode_number for episode in merged] == [1, 2]
    assert [t.name for t in merged[1].per_language] == ["The Kingsroad", "Der Königsweg"]
    assert merged[0].timings == {"recap": [0, 45]}


def test_merge_season_rejects_different_episode_counts() -> None:
    per_language = [
        SeasonInfo.model_validate({"season_number": 1, "episodes": SEASON_EPISODES[1]["en"]}),
        SeasonInfo.model_validate({"season_number": 1, "episodes": SEASON_EPISODES[1]["fr"][:1]}),
    ]

    with pytest.raises(EpisodeAlignmentError):
        merge_season(1, ["en", "fr"], per_language, _previous())
