import asyncio
from types import SimpleNamespace
from typing import Any

import pytest

from thermoscan.ble_source import AdvertisementSource, to_event
from thermoscan.models import BleEvent, DeviceDiscovered, ManufacturerDataAdvertisement, ScanStateChanged


class FakeScanner:
    instances: list["FakeScanner"] = []

    def __init__(self, detection_callback: Any, **kwargs: Any) -> None:
        self.detection_callback = detection_callback
        self.kwargs = kwargs
        self.started = False
        self.stopped = False
        FakeScanner.instances.append(self)

    async def start(self) -> None:
        self.started = True
        device = SimpleNamespace(address="A4:C1:38:00:00:01")
        self.detection_callback(device, SimpleNamespace(manufacturer_data={0xEC88: b"\x01\x02"}))
        self.detection_callback(device, SimpleNamespace(manufacturer_data={}))

    async def stop(self) -> None:
        self.stopped = True


@pytest.fixture(autouse=True)
def fake_scanner(monkeypatch: pytest.MonkeyPatch) -> None:
    FakeScanner.instances = []
    monkeypatch.setattr("thermoscan.ble_source.BleakScanner", FakeScanner)


def test_to_event_variants() -> None:
    device = SimpleNamespace(address="AA:BB")
    with_data = to_event(device, SimpleNamespace(manufacturer_data={1: b"x"}))  # type: ignore[arg-type]
    without = to_event(device, SimpleNamespace(manufacturer_data={}))  # type: ignore[arg-type]
    assert with_data == ManufacturerDataAdvertisement(id="AA:BB", manufacturer_data={1: b"x"})
    assert without == DeviceDiscovered(id="AA:BB")


def test_events_yields_scan_state_then_advertisements_in_order() -> None:
    async def take(n: int, source: AdvertisementSource) -> list[BleEvent]:
        out: list[BleEvent] = []
        gen = source.events()
        async for event in gen:
            out.append(event)
            if len(out) == n:
                break
        await gen.aclose()  # type: ignore[attr-defined]
        return out

    events = asyncio.run(take(3, AdvertisementSource()))

    assert events == [
        ScanStateChanged(scanning=True),
        ManufacturerDataAdvertisement(id="A4:C1:38:00:00:01", manufacturer_data={0xEC88: b"\x01\x02"}),
        DeviceDiscovered(id="A4:C1:38:00:00:01"),
    ]
    scanner = FakeScanner.instances[0]
    assert scanner.started and scanner.stopped
    assert "adapter" not in scanner.kwargs


def test_adapter_is_passed_to_scanner() -> None:
    async def first(source: AdvertisementSource) -> BleEvent:
        gen = source.events()
        event = await gen.__anext__()
        await gen.aclose()  # type: ignore[attr-defined]
        return event

    asyncio.run(first(AdvertisementSource(adapter="hci1")))

    assert FakeScanner.instances[0].kwargs["adapter"] == "hci1"
