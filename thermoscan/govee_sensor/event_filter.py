from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from ..config import GOVEE_SENTINEL
from ..models import BleEvent, DeviceDiscovered, ManufacturerDataAdvertisement, ScanStateChanged
from .decoder import MIN_PAYLOAD_LEN, decode_mac

GOVEE_VENDOR_KEY: Final[int] = 0xEC88  # 60552


class FilterOutcome(StrEnum):
    ACCEPTED = "accepted"
    WRONG_VARIANT = "wrong_variant"
    NO_MANUFACTURER_DATA = "no_manufacturer_data"
    VENDOR_KEY_MISSING = "vendor_key_missing"
    MAGIC_MISMATCH = "magic_mismatch"
    PAYLOAD_TOO_SHORT = "payload_too_short"


@dataclass(frozen=True)
class FilterResult:
    outcome: FilterOutcome
    device_id: str | None = None
    # Only set on acceptance
    payload: bytes | None = None

    @property
    def accepted(self) -> bool:
        return self.outcome is FilterOutcome.ACCEPTED

    @property
    def candidate(self) -> tuple[str, bytes] | None:
        """``(device_id, payload)`` for an accepted event, otherwise None."""
        if self.device_id is None or self.payload is None:
            return None
        return self.device_id, self.payload


def _filter_advertisement(device_id: str, manufacturer_data: Mapping[int, bytes], sentinel: str) -> FilterResult:
    if not manufacturer_data:
        return FilterResult(FilterOutcome.NO_MANUFACTURER_DATA, device_id)
    payload = bytes(next(iter(manufacturer_data.values())))

    magic = manufacturer_data.get(GOVEE_VENDOR_KEY)
    if magic is None:
        return FilterResult(FilterOutcome.VENDOR_KEY_MISSING, device_id)
    if decode_mac(bytes(magic)) != sentinel:
        return FilterResult(FilterOutcome.MAGIC_MISMATCH, device_id)

    if len(payload) < MIN_PAYLOAD_LEN:
        return FilterResult(FilterOutcome.PAYLOAD_TOO_SHORT, device_id)
    return FilterResult(FilterOutcome.ACCEPTED, device_id, payload)


def filter_event(event: BleEvent, sentinel: str = GOVEE_SENTINEL) -> FilterResult:
    """Decide whether ``event`` is a vendor broadcast worth decoding.

    The candidate payload is the first manufacturer-data entry. Acceptance also
    requires a 0xEC88 entry whose bytes 5..11, read with the same routine as the
    MAC field, hex-encode to ``sentinel``. That entry acts as a vendor magic
    rather than an address; the naming is inherited from the MAC routine.
    """
    match event:
        case ManufacturerDataAdvertisement(id=device_id, manufacturer_data=manufacturer_data):
            return _filter_advertisement(device_id, manufacturer_data, sentinel)
        case DeviceDiscovered() | ScanStateChanged():
            return FilterResult(FilterOutcome.WRONG_VARIANT)


def extract_payload(event: BleEvent, sentinel: str = GOVEE_SENTINEL) -> tuple[str, bytes] | None:
    return filter_event(event, sentinel).candidate
