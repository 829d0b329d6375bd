import time

from ..models import Reading
from .decoder import decode_payload


def build_reading(device_id: str, payload: bytes) -> Reading:
    """Decode ``payload`` and stamp it with the current wall-clock second."""
    s = decode_payload(payload)
    return Reading(
        id=device_id,
        temperature=s.temperature,
        battery=s.battery,
        humidity=s.humidity,
        mac=s.mac,
        timestamp=int(time.time()),
    )
