import asyncio
import logging
from collections.abc import AsyncIterable

from .config import GOVEE_SENTINEL, SinkConfig
from .govee_sensor.event_filter import filter_event
from .govee_sensor.helpers import build_reading
from .models import BleEvent
from .shipper import ship_reading


async def run_pipeline(
    events: AsyncIterable[BleEvent],
    sink: SinkConfig,
    sentinel: str = GOVEE_SENTINEL,
) -> int:
    """Filter, decode and ship each event in order.

    Each shipment is awaited before the next event is pulled. Returns the number
    of readings shipped once ``events`` is exhausted.
    """
    logging.info("Pipeline starting: sink=%s, stream %s=%s", sink.url, sink.stream_label, sink.stream_value)
    shipped = 0
    async for event in events:
        result = filter_event(event, sentinel)
        candidate = result.candidate
        if candidate is None:
            logging.debug("Dropped event from %s: %s", result.device_id, result.outcome)
            continue

        reading = build_reading(*candidate)
        logging.info(
            "Reading from %s: temp=%s hum=%s%% batt=%s%% mac=%s",
            reading.id,
            reading.temperature,
            reading.humidity,
            reading.battery,
            reading.mac,
        )
        # requests blocks; run it off the loop so bleak callbacks keep queueing
        if await asyncio.to_thread(ship_reading, reading, sink):
            shipped += 1
    return shipped
