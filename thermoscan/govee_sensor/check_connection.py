import asyncio
import contextlib
import logging
import os
import sys
from collections import Counter
from collections.abc import AsyncIterable

from bleak.exc import BleakError

from ..ble_source import AdvertisementSource
from ..config import GOVEE_SENTINEL
from ..models import BleEvent, Reading
from .event_filter import FilterOutcome, filter_event
from .helpers import build_reading


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value, 0)
    except ValueError:
        return default


async def collect_readings(
    events: AsyncIterable[BleEvent],
    timeout_secs: float,
    sentinel: str = GOVEE_SENTINEL,
) -> tuple[list[Reading], Counter[FilterOutcome]]:
    """Decode vendor broadcasts for up to ``timeout_secs`` without shipping them."""
    readings: list[Reading] = []
    outcomes: Counter[FilterOutcome] = Counter()
    with contextlib.suppress(TimeoutError):
        async with asyncio.timeout(timeout_secs):
            async for event in events:
                result = filter_event(event, sentinel)
                outcomes[result.outcome] += 1
                candidate = result.candidate
                if candidate is not None:
                    readings.append(build_reading(*candidate))
    return readings, outcomes


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    timeout_secs = _parse_int(os.environ.get("CHECK_TIMEOUT_SECS"), 10)
    adapter = os.environ.get("BLE_ADAPTER") or None
    sentinel = os.environ.get("VENDOR_SENTINEL") or GOVEE_SENTINEL

    logging.info("Scanning for %ss (adapter=%s)", timeout_secs, adapter or "default")
    source = AdvertisementSource(adapter=adapter)
    try:
        readings, outcomes = asyncio.run(collect_readings(source.events(), timeout_secs, sentinel))
    except BleakError as exc:
        print(f"Bluetooth adapter unavailable (adapter={adapter or 'default'}): {exc}", file=sys.stderr)
        sys.exit(1)

    for reading in readings:
        print(
            "Reading: "
            f"id={reading.id} "
            f"temperature={reading.temperature} "
            f"humidity={reading.humidity} "
            f"battery={reading.battery} "
            f"mac={reading.mac}"
        )
    print("Outcomes: " + ", ".join(f"{outcome}={count}" for outcome, count in sorted(outcomes.items())))

    if not readings:
        print(
            f"Note: no sensor broadcasts seen within {timeout_secs}s. "
            "Increase CHECK_TIMEOUT_SECS or move closer to the sensor.",
            file=sys.stderr,
        )

    sys.exit(0)


if __name__ == "__main__":
    main()
