"""Basic sanity checks for the simulated producer."""

from speedo.metrics import Mode
from speedo.mock.producer import SimulatedProducer
from speedo.speedometer import Speedometer


def test_accumulation_only_goes_up():
    meter = Speedometer(mode=Mode.ACCUMULATION)
    producer = SimulatedProducer(meter, seed=42)

    previous = 0
    for _ in range(50):
        producer.step()
        value, _ = meter.snapshot()
        assert value >= previous
        previous = value
    assert previous > 0
    assert not producer.done


def test_variation_stays_non_negative():
    meter = Speedometer(mode=Mode.VARIATION)
    producer = SimulatedProducer(meter, seed=42)
    for _ in range(200):
        assert producer.step() >= 0


def test_progress_finishes_and_never_overshoots_by_much():
    meter = Speedometer(mode=Mode.PROGRESS, total=20)
    producer = SimulatedProducer(meter, seed=7)

    steps = 0
    while not producer.done and steps < 1000:
        producer.step()
        steps += 1

    value, total = meter.snapshot()
    assert producer.done
    assert total <= value <= total + 2


def test_deterministic_with_same_seed():
    meter_a = Speedometer(mode=Mode.ACCUMULATION)
    meter_b = Speedometer(mode=Mode.ACCUMULATION)
    producer_a = SimulatedProducer(meter_a, seed=99)
    producer_b = SimulatedProducer(meter_b, seed=99)

    for _ in range(10):
        assert producer_a.step() == producer_b.step()
    assert meter_a.snapshot() == meter_b.snapshot()
