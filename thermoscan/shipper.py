import json
import logging
from typing import Any

from requests import RequestException, Response, post

from .config import SinkConfig
from .models import Reading


def build_entry(reading: Reading) -> str:
    """The log line itself: the reading without its timestamp, as compact JSON."""
    entry = reading.model_dump(exclude={"timestamp"})
    return json.dumps(entry, separators=(",", ":"))


def build_envelope(reading: Reading, stream_label: str, stream_value: str) -> dict[str, Any]:
    # Loki push format: one stream, one [nanosecond timestamp, line] value
    return {
        "streams": [
            {
                "stream": {stream_label: stream_value},
                "values": [[str(reading.timestamp * 1_000_000_000), build_entry(reading)]],
            }
        ]
    }


def _post_envelope(sink: SinkConfig, envelope: dict[str, Any]) -> Response:
    headers = {
        "Authorization": f"Basic {sink.token}",
        "Content-Type": "application/json",
        "User-Agent": sink.user_agent,
    }
    return post(
        sink.url,
        data=json.dumps(envelope),
        headers=headers,
        timeout=sink.timeout,
        allow_redirects=False,
    )


def ship_reading(reading: Reading, sink: SinkConfig) -> bool:
    """POST one reading to the log sink.

    Any HTTP response counts as delivered; its body is logged whatever the
    status. Returns False only on transport failure, after which the reading
    is dropped.
    """
    envelope = build_envelope(reading, sink.stream_label, sink.stream_value)
    try:
        resp = _post_envelope(sink, envelope)
    except RequestException as exc:
        logging.warning("Error sending log for %s: %s", reading.id, exc)
        return False
    logging.info("Sink responded %s: %s", resp.status_code, resp.text)
    return True
