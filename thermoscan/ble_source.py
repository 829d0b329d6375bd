import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Any

from bleak import BleakScanner
from bleak.backends.device import BLEDevice
from bleak.backends.scanner import AdvertisementData

from .models import BleEvent, DeviceDiscovered, ManufacturerDataAdvertisement, ScanStateChanged


def to_event(device: BLEDevice, advertisement_data: AdvertisementData) -> BleEvent:
    if advertisement_data.manufacturer_data:
        return ManufacturerDataAdvertisement(
            id=device.address,
            manufacturer_data=dict(advertisement_data.manufacturer_data),
        )
    return DeviceDiscovered(id=device.address)


class AdvertisementSource:
    """Turns bleak detection callbacks into an ordered async stream of events."""

    def __init__(self, adapter: str | None = None) -> None:
        self._adapter = adapter

    def _scanner_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"scanning_mode": "active"}
        if self._adapter:
            kwargs["adapter"] = self._adapter
        return kwargs

    async def events(self) -> AsyncIterator[BleEvent]:
        # Unbounded: a slow consumer delays events, it never drops them
        queue: asyncio.Queue[BleEvent] = asyncio.Queue()

        def detection_callback(device: BLEDevice, advertisement_data: AdvertisementData) -> None:
            queue.put_nowait(to_event(device, advertisement_data))

        scanner = BleakScanner(detection_callback=detection_callback, **self._scanner_kwargs())
        await scanner.start()
        logging.info("Scanning for advertisements (adapter=%s)", self._adapter or "default")
        try:
            yield ScanStateChanged(scanning=True)
            while True:
                yield await queue.get()
        finally:
            await scanner.stop()
            logging.info("Scanner stopped")
