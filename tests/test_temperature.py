from collections.abc import Iterable

import pytest

from aquasense.temperature import TemperatureSensor


def _probe(values: Iterable[float]):
    it = iter(values)
    return lambda: next(it)


def test_default_iterations_is_ten():
    sensor = TemperatureSensor(lambda: 21.0)
    assert sensor.iterations == 10
    assert sensor.readings == (0.0,) * 10


def test_custom_iterations():
    sensor = TemperatureSensor(lambda: 21.0, 15)
    assert sensor.iterations == 15


@pytest.mark.parametrize("size", [0, -1])
def test_invalid_iterations_rejected(size):
    with pytest.raises(ValueError):
        TemperatureSensor(lambda: 21.0, size)


def test_sample_returns_and_stores_reading():
    sensor = TemperatureSensor(_probe([22.5]), 3)
    assert sensor.sample() == 22.5
    assert sensor.readings == (22.5, 0.0, 0.0)


def test_unfilled_slots_count_as_zero():
    sensor = TemperatureSensor(lambda: 20.0, 3)
    assert sensor.read_and_adjust_temp() == 0.0
    assert sensor.read_and_adjust_temp() == 20.0


def test_median_of_default_buffer_needs_majority_filled():
    sensor = TemperatureSensor(lambda: 30.0)
    results = [sensor.read_and_adjust_temp() for _ in range(6)]
    assert all(r < 30.0 for r in results[:5])
    assert results[5] == 30.0


def test_even_size_median_averages_middle_pair():
    sensor = TemperatureSensor(_probe([10.0, 20.0]), 2)
    sensor.sample()
    sensor.sample()
    assert sensor.compute_median() == 15.0


def test_odd_size_median_is_middle_value():
    sensor = TemperatureSensor(_probe([25.0, 18.0, 40.0]), 3)
    for _ in range(3):
        sensor.sample()
    assert sensor.compute_median() == 25.0


def test_median_ignores_outlier():
    sensor = TemperatureSensor(_probe([21.0, 21.0, -127.0, 21.0, 21.0]), 5)
    results = [sensor.read_and_adjust_temp() for _ in range(5)]
    assert results[-1] == 21.0


def test_buffer_is_circular():
    sensor = TemperatureSensor(_probe([1.0, 2.0, 3.0, 4.0]), 3)
    for _ in range(4):
        sensor.sample()
    assert sensor.readings == (4.0, 2.0, 3.0)
    assert sensor.compute_median() == 3.0


def test_compute_median_does_not_read_probe():
    calls = []

    def read():
        calls.append(1)
        return 19.0

    sensor = TemperatureSensor(read, 1)
    sensor.read_and_adjust_temp()
    assert sensor.compute_median() == 19.0
    assert len(calls) == 1


def test_probe_error_propagates():
    def broken():
        raise OSError("bus fault")

    sensor = TemperatureSensor(broken, 3)
    with pytest.raises(OSError):
        sensor.read_and_adjust_temp()
    assert sensor.readings == (0.0, 0.0, 0.0)