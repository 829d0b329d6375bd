from dataclasses import dataclass
from typing import Final

# Shortest manufacturer payload that covers every field below.
MIN_PAYLOAD_LEN: Final[int] = 11


@dataclass(frozen=True)
class GoveeSample:
    temperature: float
    humidity: float
    battery: float
    mac: str


def decode_mac(data: bytes) -> str:
    """Bytes 5..11 as 12 lowercase hex characters."""
    return data[5:11].hex()


def decode_packed(data: bytes) -> int:
    """Bytes 1..4 as a big-endian unsigned integer.

    Temperature lives in the upper digits, humidity in tenths of a percent in
    the lowest three.
    """
    return int.from_bytes(data[1:4], "big")


def decode_temperature(data: bytes) -> float:
    return decode_packed(data) / 10_000.0


def decode_humidity(data: bytes) -> float:
    # Taken from the integer so it can't drift from temperature through float rounding
    return (decode_packed(data) % 1_000) / 10.0


def decode_battery(data: bytes) -> float:
    return data[4] / 10.0


def decode_payload(data: bytes) -> GoveeSample:
    if len(data) < MIN_PAYLOAD_LEN:
        raise ValueError(f"payload too short: {len(data)} < {MIN_PAYLOAD_LEN} bytes")
    return GoveeSample(
        temperature=decode_temperature(data),
        humidity=decode_humidity(data),
        battery=decode_battery(data),
        mac=decode_mac(data),
    )
