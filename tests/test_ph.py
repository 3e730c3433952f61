import pytest

from aquasense.ph import OffsetPhSensor, PhSensor


def _feeder(values):
    it = iter(values)
    return lambda: next(it)


def _identity_ph(**kwargs):
    params = dict(
        voltage_constant=1.0,
        reference_temp=25.0,
        max_adc=1.0,
        convert=lambda voltage, temperature: voltage,
    )
    params.update(kwargs)
    return PhSensor(**params)


def test_ph_defaults():
    sensor = _identity_ph(read_raw=lambda: 1.0)
    assert sensor.iterations == 40
    assert sensor.read_delay == 250


def test_ph_single_slot_returns_reading():
    sensor = _identity_ph(read_raw=lambda: 7.0, iterations=1)
    assert sensor.compute_ph_value(20.0) == 7.0
    assert sensor.average_voltage == 7.0


def test_ph_median_counts_unfilled_slots():
    sensor = _identity_ph(read_raw=_feeder([5.0, 6.0, 9.0]), iterations=3)
    assert sensor.compute_ph_value(25.0) == 0.0
    assert sensor.compute_ph_value(25.0) == 5.0
    assert sensor.compute_ph_value(25.0) == 6.0


def test_ph_every_sample_reads():
    sensor = _identity_ph(read_raw=_feeder([1.0, 2.0, 3.0]), iterations=3)
    assert [sensor.sample() for _ in range(3)] == [1.0, 2.0, 3.0]
    assert sensor.readings == (1.0, 2.0, 3.0)
    assert sensor.compute_median() == 2.0


def test_ph_scales_median_to_voltage_and_passes_temperature():
    calls = []

    def convert(voltage, temperature):
        calls.append((voltage, temperature))
        return 6.5

    sensor = PhSensor(
        voltage_constant=3300,
        reference_temp=25.0,
        max_adc=4096,
        read_raw=lambda: 4096,
        convert=convert,
        iterations=1,
    )
    assert sensor.compute_ph_value(18.5) == 6.5
    assert calls == [(3300.0, 18.5)]


def test_ph_adjust_delegates_to_convert():
    sensor = _identity_ph(
        read_raw=lambda: 0.0, convert=lambda v, t: v + t
    )
    assert sensor.adjust_ph(1.5, 20.0) == 21.5


@pytest.mark.parametrize("max_adc", [0, -1.0])
def test_ph_rejects_bad_max_adc(max_adc):
    with pytest.raises(ValueError):
        _identity_ph(read_raw=lambda: 0.0, max_adc=max_adc)


def test_ph_rejects_negative_delay():
    with pytest.raises(ValueError):
        _identity_ph(read_raw=lambda: 0.0, read_delay=-1)


def test_ph_rejects_empty_buffer():
    with pytest.raises(ValueError):
        _identity_ph(read_raw=lambda: 0.0, iterations=0)


class _Clock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


def test_offset_defaults():
    sensor = OffsetPhSensor(0.0, lambda: 1.0, clock=_Clock())
    assert sensor.iterations == 40
    assert sensor.read_delay == 250


def test_offset_linear_mapping():
    clock = _Clock(1000)
    sensor = OffsetPhSensor(0.0, lambda: 2.0, iterations=1, clock=clock)
    assert sensor.compute_ph_value() == pytest.approx(7.0)


def test_offset_delay_not_elapsed_keeps_buffer_empty():
    clock = _Clock(100)
    sensor = OffsetPhSensor(1.25, lambda: 2.0, iterations=4, clock=clock)
    assert sensor.sample() is None
    assert sensor.readings == (0.0, 0.0, 0.0, 0.0)
    assert sensor.compute_ph_value() == 1.25


def test_offset_respects_delay_between_reads():
    clock = _Clock(250)
    sensor = OffsetPhSensor(
        0.0, _feeder([1.0, 2.0, 3.0]), iterations=3, read_delay=250, clock=clock
    )
    assert sensor.sample() == 1.0
    clock.now = 400
    assert sensor.sample() is None
    clock.now = 500
    assert sensor.sample() == 2.0
    assert sensor.readings == (1.0, 2.0, 0.0)


def test_offset_average_includes_unfilled_slots():
    clock = _Clock(1000)
    sensor = OffsetPhSensor(0.5, lambda: 4.0, iterations=2, read_delay=0, clock=clock)
    first = sensor.compute_ph_value()
    second = sensor.compute_ph_value()
    assert second == pytest.approx(2 * (first - 0.5) + 0.5)
    assert sensor.readings == (4.0, 4.0)


def test_offset_rejects_negative_delay():
    with pytest.raises(ValueError):
        OffsetPhSensor(0.0, lambda: 0.0, read_delay=-5)


def test_offset_rejects_empty_buffer():
    with pytest.raises(ValueError):
        OffsetPhSensor(0.0, lambda: 0.0, iterations=0)