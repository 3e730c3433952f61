# aquasense

Reading logic for a small water-quality station with a temperature probe, a
TDS (total dissolved solids) probe and a pH probe. Each sensor keeps its
recent readings in a fixed-size ring buffer and reports a filtered value. A
scheduler powers the probes one after another, gives each time to settle,
reads it for a fixed period and then switches it off.

The package does no I/O of its own. Every sensor takes callables for reading
a raw value, for the millisecond clock and for switching power. It runs the
same against real hardware bindings as it does in tests.

## Install

```
pip install .
pip install .[test]   # with pytest
```

## Modules

### `aquasense.sampling`

- `MedianBuffer(size)` is a ring buffer of `size` slots. Every slot starts
  at `0.0`. `add(value)` overwrites the oldest slot. `median()` returns the
  median of all slots, which is the mean of the middle pair when the size is
  even. `values()` returns the slots in storage order. A size of zero or less
  raises `ValueError`.
- `average(values)` returns the arithmetic mean. It raises `ValueError` when
  there are no values.
- `monotonic_millis()` returns milliseconds from a monotonic clock. It is the
  default clock everywhere.

### `aquasense.temperature`

`TemperatureSensor(read_celsius, iterations=10)`:

- `sample()` stores one reading.
- `compute_median()` returns the median of the last `iterations` readings.
- `read_and_adjust_temp()` does both.

The `iterations` and `readings` properties expose the buffer.

### `aquasense.tds`

- `compensate_tds(voltage, temperature, k_coefficient, reference_temp)`
  corrects the voltage with the factor
  `1 + k_coefficient * (temperature - reference_temp)`, then applies the
  probe's calibration curve and returns ppm. A zero factor raises
  `ValueError`.
- `TdsSensor(voltage_constant, k_coefficient, reference_temp, max_adc,
  read_raw, iterations=10, read_delay=250, clock=monotonic_millis)`:
  - `sample()` takes a raw ADC reading only when `read_delay` ms have passed
    since the last one. Otherwise it returns `None`.
  - `read_and_adjust_tds(temperature)` samples, scales the median by
    `voltage_constant / max_adc` and compensates the result.
  - `adjust_tds(voltage, temperature)` and `compute_median()` are also
    available.

### `aquasense.ph`

- `PhSensor(voltage_constant, reference_temp, max_adc, read_raw, convert,
  iterations=40, read_delay=250)`:
  - `compute_ph_value(temperature)` samples and scales the median reading to
    a voltage, which it stores in `average_voltage`. It then returns
    `convert(voltage, temperature)`.
  - Every `sample()` takes a reading. `read_delay` is only advertised to the
    scheduler.
- `OffsetPhSensor(offset, read_volts, iterations=40, read_delay=250,
  clock=monotonic_millis)`:
  - `sample()` is rate-limited by `read_delay`.
  - `compute_ph_value()` returns `3.5 * mean + offset`. The mean is taken over
    every slot of the buffer, and unfilled slots count as `0.0`.

### `aquasense.monitor`

- `SensorState` has the members `OFF`, `INIT`, `STABILIZE`, `READ` and
  `SHUTDOWN`.
- `SensorStage(name, read, power=None, clock=..., stabilize_ms=2000,
  duration_ms=12000, read_delay=0, on_done=None)`:
  - After `start()`, each `step()` advances the machine. It powers on, waits
    `stabilize_ms`, then calls `read` every `read_delay` ms until
    `duration_ms` have passed since power-up.
  - It then powers off, returns to `OFF` and calls `on_done`.
  - The last reading is kept in `value`.
- `WaterQualityMonitor(temperature, tds, ph, clock=..., power=None,
  sampling_interval=60000, reading_duration=12000)` chains the three stages:
  temperature, then TDS, then pH.
  - The temperature result compensates the TDS and pH readings.
  - `power(channel, on)` receives `"temperature"`, `"tds"` or `"ph"`.
  - Call `tick()` from your main loop. The first tick starts the interval
    timer, and a new cycle begins once more than `sampling_interval` ms have
    passed.
  - Results are available as `adjusted_temp`, `adjusted_tds` and
    `adjusted_ph`. Each is `0.0` before its first reading.

### `aquasense.uptime`

- `split_millis(millis)` returns `(hours, minutes, seconds)`.
- `UptimeCalculator(clock)` has `update()`, which sets and returns
  `hours`, `minutes` and `seconds` from the clock.
- `AccumulatingUptime(clock, state=None)` adds the time since the previous
  `update()` to a `RetainedUptime` dataclass, which you can persist across
  sleep cycles.
  - The first update only records the clock.
  - A clock that wraps around an unsigned 32-bit counter is handled.
  - `hours`, `minutes` and `seconds` can be set. Negative values raise
    `ValueError`.

### `aquasense.i2c`

`I2CCommunicator(bus, max_retries, delay_min, delay_max, sleep=time.sleep,
rng=None)`:

- `transmit(address, data)` calls `bus.write(address, data)`.
- On `OSError` it sleeps a random delay of `delay_min` to `delay_max` ms and
  tries again, up to `max_retries` attempts in all.
- When every attempt fails it raises `TransmissionError`, which carries
  `address` and `attempts`.

### `aquasense.messages`

- `encode_float_message(message_type, value)` builds a 6-byte frame: a type
  byte, a length byte of `8`, and a little-endian float32.
- `decode_float_message(data)` returns `(message_type, value)`. Trailing
  bytes are ignored.
- Short frames, a wrong length byte, an out-of-range type or an
  unrepresentable value raise `MessageError`.
- The module defines the constants `TEMPERATURE_MESSAGE` (`0x02`),
  `TDS_MESSAGE` (`0x03`) and `MESSAGE_LENGTH`.

## Example

```python
from aquasense.tds import TdsSensor, compensate_tds
from aquasense.temperature import TemperatureSensor

temperature = TemperatureSensor(read_celsius=lambda: 21.5, iterations=10)
tds = TdsSensor(
    voltage_constant=3.3,
    k_coefficient=0.02,
    reference_temp=25.0,
    max_adc=1024.0,
    read_raw=lambda: 310,
    iterations=15,
    read_delay=650,
)

celsius = temperature.read_and_adjust_temp()
ppm = tds.read_and_adjust_tds(celsius)

print(compensate_tds(1.0, 25.0, 0.02, 25.0))
```

## What it does not do

- There are no hardware drivers. Reading the one-wire probe or the ADCs,
  driving the I2C bus and switching power pins are left to the callables you
  pass in.
- `PhSensor` has no built-in voltage-to-pH conversion and no calibration
  routine. Supply them through `convert`.
- There is no command-line program and no data storage.