"""
Standard waterfall structures available out of the box, plus a small builder
for custom structures with the same tier layout.
"""

from __future__ import annotations

from typing import Optional

from fund_waterfall.waterfall.models import TierType, WaterfallStructure, WaterfallTier


STANDARD_WATERFALL = WaterfallStructure(
    id="standard-4-tier",
    name="Standard 4-Tier Waterfall",
    description="Return of capital, 8% preferred return, GP catch-up to 20%, then 80/20 split",
    tiers=[
        WaterfallTier(id="tier-1", name="Return of Capital", type=TierType.RETURN_OF_CAPITAL),
        WaterfallTier(id="tier-2", name="Preferred Return (8%)", type=TierType.PREFERRED_RETURN, hurdle_rate=8),
        WaterfallTier(
            id="tier-3",
            name="GP Catch-Up",
            type=TierType.GP_CATCHUP,
            catch_up_percent=20,
            lp_split=0,
            gp_split=100,
        ),
        WaterfallTier(
            id="tier-4",
            name="Carried Interest Split",
            type=TierType.CARRIED_INTEREST_SPLIT,
            lp_split=80,
            gp_split=20,
        ),
    ],
)

AMERICAN_WATERFALL = WaterfallStructure(
    id="american-3-tier",
    name="American-Style 3-Tier Waterfall",
    description="Return of capital, 8% preferred return, then 80/20 split (no catch-up)",
    tiers=[
        WaterfallTier(id="tier-1", name="Return of Capital", type=TierType.RETURN_OF_CAPITAL),
        WaterfallTier(id="tier-2", name="Preferred Return (8%)", type=TierType.PREFERRED_RETURN, hurdle_rate=8),
        WaterfallTier(
            id="tier-3",
            name="Profit Split",
            type=TierType.CARRIED_INTEREST_SPLIT,
            lp_split=80,
            gp_split=20,
        ),
    ],
)

PRESETS: dict[str, WaterfallStructure] = {
    "standard": STANDARD_WATERFALL,
    "american": AMERICAN_WATERFALL,
}

_PRESET_ALIASES = {
    "european": "standard",
    STANDARD_WATERFALL.id: "standard",
    AMERICAN_WATERFALL.id: "american",
}


def get_preset(key: str) -> WaterfallStructure:
    """Look up a preset by short name ("standard", "european", "american") or structure id."""
    k = key.strip().lower()
    k = _PRESET_ALIASES.get(k, k)
    if k not in PRESETS:
        raise KeyError(f"Unknown waterfall preset: {key!r}")
    return PRESETS[k]


def build_structure(
    name: str = "Custom Waterfall",
    hurdle_rate: float = 8.0,
    catch_up_percent: Optional[float] = 20.0,
    lp_split: float = 80.0,
    gp_split: float = 20.0,
    structure_id: str = "custom",
) -> WaterfallStructure:
    """
    Build a return of capital / preferred return / (catch-up) / split structure.
    Pass catch_up_percent=None for an American-style structure without catch-up.
    """
    tiers = [
        WaterfallTier(id="tier-1", name="Return of Capital", type=TierType.RETURN_OF_CAPITAL),
        WaterfallTier(
            id="tier-2",
            name=f"Preferred Return ({hurdle_rate:g}%)",
            type=TierType.PREFERRED_RETURN,
            hurdle_rate=hurdle_rate,
        ),
    ]
    if catch_up_percent is not None:
        tiers.append(WaterfallTier(
            id=f"tier-{len(tiers) + 1}",
            name=f"GP Catch-Up ({catch_up_percent:g}%)",
            type=TierType.GP_CATCHUP,
            catch_up_percent=catch_up_percent,
            lp_split=0,
            gp_split=100,
        ))
    tiers.append(WaterfallTier(
        id=f"tier-{len(tiers) + 1}",
        name=f"Carried Interest Split ({lp_split:g}/{gp_split:g})",
        type=TierType.CARRIED_INTEREST_SPLIT,
        lp_split=lp_split,
        gp_split=gp_split,
    ))

    parts = [f"Return of capital, {hurdle_rate:g}% preferred return"]
    if catch_up_percent is not None:
        parts.append(f"GP catch-up to {catch_up_percent:g}%")
    parts.append(f"then {lp_split:g}/{gp_split:g} split")
    return WaterfallStructure(id=structure_id, name=name, description=", ".join(parts), tiers=tiers)
