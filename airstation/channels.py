"""
Per-channel value domains, random-walk step sizes and severity breakpoints.

All channels share one code path; only the numbers in CHANNEL_SPECS differ.
"""
from dataclasses import dataclass
from typing import Dict, Tuple, Union

from .models import ChannelKind, Tier

Number = Union[int, float]


@dataclass(frozen=True)
class ChannelSpec:
    """Numeric policy and display metadata for one channel kind."""
    kind: ChannelKind
    max_value: Number
    step_bound: Number
    # Inclusive upper bounds of TIER0..TIER4, anything above is TIER5
    breakpoints: Tuple[Number, Number, Number, Number, Number]
    integral: bool
    label: str
    unit: str
    decimals: int
    gauge_max: Number
    accent_color: str
    min_value: Number = 0

    def clamp_range(self, value: Number) -> Tuple[Number, Number]:
        """Interval the next value is drawn from."""
        low = max(self.min_value, value - self.step_bound)
        high = min(self.max_value, value + self.step_bound)
        return low, high

    def in_domain(self, value: Number) -> bool:
        return self.min_value <= value <= self.max_value


CHANNEL_SPECS: Dict[ChannelKind, ChannelSpec] = {
    ChannelKind.TEMPERATURE: ChannelSpec(
        kind=ChannelKind.TEMPERATURE,
        max_value=50,
        step_bound=3,
        breakpoints=(10, 20, 25, 35, 40),
        integral=True,
        label="Temperature",
        unit="°C",
        decimals=0,
        gauge_max=50,
        accent_color="green",
    ),
    ChannelKind.OZONE: ChannelSpec(
        kind=ChannelKind.OZONE,
        max_value=241,
        step_bound=6,
        breakpoints=(32, 64, 119, 180, 240),
        integral=True,
        label="Ozone (O3)",
        unit="µg/m³",
        decimals=0,
        gauge_max=241,
        accent_color="lightblue",
    ),
    # Gauge scale goes to 200 but readings never leave 0..100
    ChannelKind.PARTICULATE_MATTER: ChannelSpec(
        kind=ChannelKind.PARTICULATE_MATTER,
        max_value=100,
        step_bound=3,
        breakpoints=(9, 19, 34, 50, 99),
        integral=True,
        label="Particulate matter (PM10)",
        unit="µg/m³",
        decimals=0,
        gauge_max=200,
        accent_color="darkblue",
    ),
    ChannelKind.CARBON_MONOXIDE: ChannelSpec(
        kind=ChannelKind.CARBON_MONOXIDE,
        max_value=30.0,
        step_bound=1.5,
        breakpoints=(0.9, 1.9, 3.9, 10.9, 29.9),
        integral=False,
        label="Carbon monoxide (CO)",
        unit="mg/m³",
        decimals=1,
        gauge_max=30.0,
        accent_color="yellow",
    ),
    ChannelKind.NITROGEN_DIOXIDE: ChannelSpec(
        kind=ChannelKind.NITROGEN_DIOXIDE,
        max_value=500,
        step_bound=8,
        breakpoints=(24, 49, 99, 200, 499),
        integral=True,
        label="Nitrogen dioxide (NO2)",
        unit="µg/m³",
        decimals=0,
        gauge_max=500,
        accent_color="red",
    ),
    ChannelKind.SULFUR_DIOXIDE: ChannelSpec(
        kind=ChannelKind.SULFUR_DIOXIDE,
        max_value=3.0,
        step_bound=0.3,
        breakpoints=(0.1, 0.2, 0.5, 1.0, 1.3),
        integral=False,
        label="Sulfur dioxide (SO2)",
        unit="µg/m³",
        decimals=1,
        gauge_max=3.0,
        accent_color="orange",
    ),
}

TIER_COLORS: Dict[Tier, str] = {
    Tier.TIER0: "darkblue",
    Tier.TIER1: "lightblue",
    Tier.TIER2: "turquoise",
    Tier.TIER3: "yellow",
    Tier.TIER4: "orange",
    Tier.TIER5: "red",
}


def spec_for(kind: ChannelKind) -> ChannelSpec:
    return CHANNEL_SPECS[kind]


def classify(kind: ChannelKind, value: Number) -> Tier:
    """Map a value to its severity tier using the kind's breakpoints.

    Pure function of (kind, value); no hysteresis.

    Examples:
        >>> classify(ChannelKind.TEMPERATURE, 40)
        <Tier.TIER4: 4>
        >>> classify(ChannelKind.TEMPERATURE, 41)
        <Tier.TIER5: 5>
    """
    for tier, upper in zip(Tier, CHANNEL_SPECS[kind].breakpoints):
        if value <= upper:
            return tier
    return Tier.TIER5


def tier_color(tier: Tier) -> str:
    return TIER_COLORS[tier]
