import pytest
from pydantic import ValidationError

from thermoscan.govee_sensor.helpers import build_reading
from thermoscan.models import Reading

PAYLOAD = bytes([0, 10, 100, 255, 100, 100, 0, 0, 0, 0, 0, 0, 0])


def test_build_reading_populates_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("time.time", lambda: 1735689600.7)

    reading = build_reading("1234", PAYLOAD)

    assert reading.id == "1234"
    assert reading.temperature == 68.1215
    assert reading.battery == 10.0
    assert reading.humidity == 21.5
    assert reading.mac == "640000000000"
    assert reading.timestamp == 1735689600


def test_only_timestamp_varies_between_calls(monkeypatch: pytest.MonkeyPatch) -> None:
    clock = iter([100.0, 105.0])
    monkeypatch.setattr("time.time", lambda: next(clock))

    first = build_reading("1234", PAYLOAD)
    second = build_reading("1234", PAYLOAD)

    assert first.model_dump(exclude={"timestamp"}) == second.model_dump(exclude={"timestamp"})
    assert second.timestamp >= first.timestamp


def test_reading_is_immutable() -> None:
    reading = build_reading("1234", PAYLOAD)
    with pytest.raises(ValidationError):
        reading.temperature = 0.0  # type: ignore[misc]


def test_reading_rejects_malformed_mac() -> None:
    with pytest.raises(ValidationError):
        Reading(id="x", temperature=1.0, battery=1.0, humidity=1.0, mac="64:00:00:00:00:00", timestamp=0)
