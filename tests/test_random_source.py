"""Tests for injectable random sources."""

import random

import pytest

from hizawye.random_source import ScriptedRandomSource, SystemRandomSource


def test_system_random_source_is_reproducible_with_seed():
    first = SystemRandomSource(seed=11)
    second = SystemRandomSource(seed=11)
    assert [first.uniform() for _ in range(5)] == [second.uniform() for _ in range(5)]


def test_system_random_source_accepts_existing_generator():
    rng = random.Random(5)
    expected = random.Random(5).random()
    assert SystemRandomSource(rng=rng).uniform() == expected


def test_scripted_source_replays_and_raises_when_exhausted():
    rng = ScriptedRandomSource([0.1, 0.7])
    assert rng.uniform() == 0.1
    assert rng.uniform() == 0.7
    assert rng.calls == 2
    with pytest.raises(RuntimeError):
        rng.uniform()


def test_scripted_source_can_cycle():
    rng = ScriptedRandomSource([0.3], cycle=True)
    assert [rng.uniform() for _ in range(4)] == [0.3] * 4


def test_scripted_source_rejects_values_outside_unit_interval():
    with pytest.raises(ValueError):
        ScriptedRandomSource([1.0])


def test_choice_maps_draw_onto_items():
    items = ["a", "b", "c", "d"]
    assert ScriptedRandomSource([0.0]).choice(items) == "a"
    assert ScriptedRandomSource([0.49]).choice(items) == "b"
    assert ScriptedRandomSource([0.999]).choice(items) == "d"


def test_choice_consumes_one_draw_and_rejects_empty():
    rng = ScriptedRandomSource([0.5, 0.5])
    rng.choice(["x", "y"])
    assert rng.calls == 1
    with pytest.raises(IndexError):
        rng.choice([])
