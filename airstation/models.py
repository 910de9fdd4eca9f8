"""
Pydantic models shared by the loader, the simulators and the publishers.
"""
from enum import Enum, IntEnum
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt


class ChannelKind(str, Enum):
    """The six measurement channels a station can show, in display order."""
    TEMPERATURE = "temperature"
    OZONE = "ozone"
    PARTICULATE_MATTER = "particulate_matter"
    CARBON_MONOXIDE = "carbon_monoxide"
    NITROGEN_DIOXIDE = "nitrogen_dioxide"
    SULFUR_DIOXIDE = "sulfur_dioxide"

    @property
    def config_key(self) -> str:
        return CONFIG_KEYS[self]


class Tier(IntEnum):
    """Severity band of a reading, TIER0 is the safest."""
    TIER0 = 0
    TIER1 = 1
    TIER2 = 2
    TIER3 = 3
    TIER4 = 4
    TIER5 = 5


CONFIG_KEYS = {
    ChannelKind.TEMPERATURE: "temperatureEnabled",
    ChannelKind.OZONE: "ozoneEnabled",
    ChannelKind.PARTICULATE_MATTER: "particulateEnabled",
    ChannelKind.CARBON_MONOXIDE: "carbonMonoxideEnabled",
    ChannelKind.NITROGEN_DIOXIDE: "nitrogenDioxideEnabled",
    ChannelKind.SULFUR_DIOXIDE: "sulfurDioxideEnabled",
}


class StationConfig(BaseModel):
    """Validated set of enabled channels for one station."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: bool = Field(..., alias="temperatureEnabled")
    ozone: bool = Field(..., alias="ozoneEnabled")
    particulate_matter: bool = Field(..., alias="particulateEnabled")
    carbon_monoxide: bool = Field(..., alias="carbonMonoxideEnabled")
    nitrogen_dioxide: bool = Field(..., alias="nitrogenDioxideEnabled")
    sulfur_dioxide: bool = Field(..., alias="sulfurDioxideEnabled")

    def is_enabled(self, kind: ChannelKind) -> bool:
        return getattr(self, kind.value)

    def enabled_kinds(self) -> List[ChannelKind]:
        """Enabled channels in display order."""
        return [kind for kind in ChannelKind if self.is_enabled(kind)]


class ChannelReading(BaseModel):
    """One channel's value and the tier computed from that same value."""
    model_config = ConfigDict(frozen=True)

    kind: ChannelKind
    value: Union[NonNegativeInt, NonNegativeFloat]
    tier: Tier
