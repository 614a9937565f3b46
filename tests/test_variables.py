import random

import pytest

from walkforward.errors import ConfigError
from walkforward.optimizer import RangeBoundFloat, RangeBoundInteger, RangeBoundVariables


def _variables():
    variables = RangeBoundVariables()
    variables.create_bool("allow_shorts")
    variables.create_float("threshold", 0.25, 0.75)
    variables.create_int("lookback", 3, 9)
    return variables


def test_randomized_values_stay_in_bounds():
    variables = _variables()
    rng = random.Random(7)
    seen_ints = set()
    for _ in range(10000):
        variables.randomize(rng)
        assert 0.25 <= variables.get_float("threshold") < 0.75
        assert 3 <= variables.get_int("lookback") <= 9
        assert variables.get_bool("allow_shorts") in (True, False)
        seen_ints.add(variables.get_int("lookback"))
    assert seen_ints == set(range(3, 10))


def test_same_seed_gives_same_values():
    first = _variables()
    second = _variables()
    first.randomize(random.Random(42))
    second.randomize(random.Random(42))
    assert first.as_dict() == second.as_dict()


def test_bounds_must_be_ordered():
    with pytest.raises(ConfigError):
        RangeBoundFloat(1.0, 1.0)
    with pytest.raises(ConfigError):
        RangeBoundInteger(5, 2)


def test_duplicate_names_are_rejected_per_kind():
    variables = _variables()
    with pytest.raises(ConfigError):
        variables.create_int("lookback", 1, 2)
    variables.create_int("threshold", 1, 2)
    assert len(variables) == 4


def test_missing_names_raise_key_error():
    variables = _variables()
    with pytest.raises(KeyError):
        variables.get_float("lookback")
    with pytest.raises(KeyError):
        variables.get_bool("missing")


def test_copy_is_independent():
    original = _variables()
    original.randomize(random.Random(1))
    snapshot = original.as_dict()

    duplicate = original.copy()
    duplicate.randomize(random.Random(2))

    assert original.as_dict() == snapshot
    assert set(duplicate.as_dict()) == {"allow_shorts", "threshold", "lookback"}


def test_float_draws_stay_in_half_open_range():
    variable = RangeBoundFloat(1.0, 2.0)
    rng = random.Random(2014)
    for _ in range(10000):
        variable.randomize(rng)
        assert 1.0 <= variable.value < 2.0
