from __future__ import annotations

import pytest

from lightrail.domain.algorithms.headway import headway_fallback_arrivals, stop_hash


def test_stop_hash_is_stable_and_32_bit() -> None:
    assert stop_hash("A") == 65
    assert stop_hash("AB") == 65 * 33 + 66
    assert 0 <= stop_hash("GUNGAHLIN_PLACE" * 20) < 2**32


def test_empty_stop_id_hashes_like_default() -> None:
    assert stop_hash("") == stop_hash("default")


@pytest.mark.parametrize("now", [1_700_000_000, 1_700_000_359, 1_700_000_360])
def test_fallback_returns_one_arrival_per_direction(now: int) -> None:
    a, b = headway_fallback_arrivals("ALINGA", now, headway_s=360)

    assert (a.direction_id, b.direction_id) == (0, 1)
    assert a.source == b.source == "fallback"
    for arrival in (a, b):
        assert 0 < arrival.seconds_away <= 360
        assert arrival.epoch_seconds - now == arrival.seconds_away


def test_directions_are_half_a_headway_apart() -> None:
    a, b = headway_fallback_arrivals("ALINGA", 1_700_000_000, headway_s=360)

    assert (b.epoch_seconds - a.epoch_seconds) % 360 == 180


def test_fallback_is_deterministic_per_stop() -> None:
    now = 1_700_000_000
    assert headway_fallback_arrivals("EPIC", now) == headway_fallback_arrivals("EPIC", now)
