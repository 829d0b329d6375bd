from collections.abc import Mapping
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field


class Reading(BaseModel):
    """One decoded sensor broadcast.

    Field order is the order of the shipped log entry; ``timestamp`` is carried
    only in the envelope's line timestamp.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    temperature: float
    battery: float
    humidity: float
    mac: str = Field(pattern=r"^[0-9a-f]{12}$")
    timestamp: int


# Advertisement source events. BleEvent is closed: consumers match on these three.


@dataclass(frozen=True)
class ManufacturerDataAdvertisement:
    id: str
    manufacturer_data: Mapping[int, bytes] = field(default_factory=dict)


@dataclass(frozen=True)
class DeviceDiscovered:
    id: str


@dataclass(frozen=True)
class ScanStateChanged:
    scanning: bool


BleEvent = ManufacturerDataAdvertisement | DeviceDiscovered | ScanStateChanged
