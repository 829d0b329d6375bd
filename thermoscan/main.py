import asyncio
import logging
import sys

from bleak.exc import BleakError

from .ble_source import AdvertisementSource
from .config import SinkConfig, load_settings
from .pipeline import run_pipeline


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def main() -> None:
    settings = load_settings()
    _setup_logging(settings.log_level)
    logging.info("Starting Bluetooth scanner")

    source = AdvertisementSource(adapter=settings.ble_adapter)
    sink = SinkConfig.from_settings(settings)
    try:
        asyncio.run(run_pipeline(source.events(), sink, sentinel=settings.vendor_sentinel))
    except BleakError as exc:
        logging.error("No usable Bluetooth adapter: %s. Exiting", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        logging.info("Stopping scanner")


if __name__ == "__main__":
    main()
