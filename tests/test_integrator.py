import math

import pytest

from integrator import MAX_SAMPLES, Sample, SystemParameters, integrate


def test_two_step_scenario():
    data = integrate(28.0, 10.0, 8 / 3, 1.0, 0.5)

    assert len(data) == 2
    assert data[0] == (0.0, 1.0, 1.0, 1.0)

    dx0 = 10.0 * (1.0 - 1.0)
    dy0 = 1.0 * (28.0 - 1.0) - 1.0
    dz0 = 1.0 * 1.0 - 8 / 3 * 1.0
    assert data[1] == (0.5, 1.0 + dx0 * 0.5, 1.0 + dy0 * 0.5, 1.0 + dz0 * 0.5)


def test_first_sample_is_initial_condition():
    data = integrate(10.0, 3.0, 1.0, 0.1, 0.001)
    assert data[0] == Sample(0.0, 1.0, 1.0, 1.0)
    assert data[0].t == 0.0


@pytest.mark.parametrize(
    "max_time, step_size, expected",
    [
        (1.0, 0.5, 2),
        (2.0, 0.25, 8),
        (1.25, 0.5, 3),
        (0.5, 1.0, 1),
    ],
)
def test_sample_count(max_time, step_size, expected):
    data = integrate(28.0, 10.0, 8 / 3, max_time, step_size)
    assert len(data) == expected == math.ceil(max_time / step_size)


def test_stops_before_max_time():
    data = integrate(28.0, 10.0, 8 / 3, 3.0, 0.01)
    assert all(sample.t < 3.0 for sample in data)
    assert [s.t for s in data] == sorted(s.t for s in data)


def test_no_samples_for_non_positive_max_time():
    assert integrate(28.0, 10.0, 8 / 3, 0.0, 0.1) == []
    assert integrate(28.0, 10.0, 8 / 3, -5.0, 0.1) == []


def test_deterministic():
    params = SystemParameters(28.0, 10.0, 8 / 3, 5.0, 0.001)
    assert integrate(*params) == integrate(*params)


def test_default_parameters():
    params = SystemParameters()
    assert params == (28.0, 10.0, 8 / 3, 40.0, 0.001)


def test_blow_up_propagates_without_raising():
    data = integrate(28.0, 10.0, 8 / 3, 1000.0, 1.0)
    assert len(data) == 1000
    assert not all(math.isfinite(v) for sample in data for v in sample[1:])


def test_rejects_non_positive_step():
    with pytest.raises(ValueError):
        integrate(28.0, 10.0, 8 / 3, 1.0, 0.0)
    with pytest.raises(ValueError):
        integrate(28.0, 10.0, 8 / 3, 1.0, -0.1)


@pytest.mark.parametrize("max_time", [math.inf, -math.inf, math.nan, 1e300])
def test_rejects_unreachable_max_time(max_time):
    with pytest.raises(ValueError):
        integrate(28.0, 10.0, 8 / 3, max_time, 1.0)


def test_rejects_too_many_samples():
    with pytest.raises(ValueError):
        integrate(28.0, 10.0, 8 / 3, MAX_SAMPLES + 1.0, 1.0)
