"""RandomHelpers: injected forks first, deterministic fallbacks otherwise."""

import pytest

from seedforge import Generator, RandomHelpers, TypeMismatch


def test_requires_callable_fork_lookup():
    with pytest.raises(TypeMismatch):
        RandomHelpers(None)


def test_injected_fork_is_used():
    fork = Generator(77)
    twin = Generator(77)
    helpers = RandomHelpers(lambda name: fork if name == "shake" else None)

    assert helpers.ensure_random("shake") is fork
    assert helpers.random_float("shake") == twin.float()
    assert helpers.random_range(0, 10, "shake") == twin.range(0, 10)
    assert helpers.random_int(1, 6, "shake") == twin.int(1, 6)
    assert helpers.random_chance(0.5, "shake") == twin.chance(0.5)
    assert helpers.random_pick(["a", "b", "c"], "shake") == twin.pick(["a", "b", "c"])


def test_fallback_without_parent_is_deterministic():
    a = RandomHelpers(lambda name: None)
    b = RandomHelpers(lambda name: None)

    assert [a.random_float("starfield") for _ in range(5)] == [b.random_float("starfield") for _ in range(5)]


def test_fallback_forks_are_cached_per_name():
    helpers = RandomHelpers(lambda name: None)
    assert helpers.ensure_random("x") is helpers.ensure_random("x")
    assert helpers.ensure_random("x") is not helpers.ensure_random("y")


def test_fallback_forks_come_from_parent_when_given():
    parent = Generator(9)
    twin = Generator(9)
    helpers = RandomHelpers(lambda name: None, random=parent, fallback_seed_prefix="audio")

    fork = helpers.ensure_random("laser")

    twin.fork("audio:fallback-base")
    assert fork.seed == twin.fork("audio:fallback:laser").seed
    assert parent.state == twin.state


def test_fallback_from_parent_matches_recorded_values():
    parent = Generator(9)
    helpers = RandomHelpers(lambda name: None, random=parent, fallback_seed_prefix="audio")

    fork = helpers.ensure_random("laser")

    assert (fork.seed, parent.state) == (1163537203, 3663131635)


def test_base_fork_is_taken_once_per_helper():
    parent = Generator(9)
    twin = Generator(9)
    helpers = RandomHelpers(lambda name: None, random=parent, fallback_seed_prefix="audio")

    helpers.ensure_random("laser")
    second = helpers.ensure_random("shield")

    twin.fork("audio:fallback-base")
    twin.fork("audio:fallback:laser")
    assert second.seed == twin.fork("audio:fallback:shield").seed


def test_objects_without_float_are_not_forks():
    helpers = RandomHelpers(lambda name: object())
    assert isinstance(helpers.ensure_random("base"), Generator)


def test_fallback_math_stays_in_bounds():
    helpers = RandomHelpers(lambda name: None)
    ints = [helpers.random_int(6, 1) for _ in range(300)]
    assert set(ints) == {1, 2, 3, 4, 5, 6}

    values = [helpers.random_range(5, -5) for _ in range(100)]
    assert all(-5 <= v < 5 for v in values)

    centered = [helpers.random_centered(4) for _ in range(100)]
    assert all(-2 <= v < 2 for v in centered)


def test_degenerate_inputs_do_not_draw():
    helpers = RandomHelpers(lambda name: None)
    fork = helpers.ensure_random("base")
    state = fork.state

    assert helpers.random_chance(0) is False
    assert helpers.random_chance(1) is True
    assert helpers.random_range(3, 3) == 3
    assert helpers.random_pick([]) is None
    assert helpers.random_pick("abc") is None
    assert fork.state == state


def test_fallback_range_treats_infinite_bounds_as_missing():
    helpers = RandomHelpers(lambda name: None)
    fork = helpers.ensure_random("base")
    state = fork.state

    assert helpers.random_range(float("inf"), float("-inf")) == 0
    assert helpers.random_range(4, float("nan")) == 4
    assert fork.state == state

    value = helpers.random_range(float("-inf"), 10)
    assert 0 <= value < 10
