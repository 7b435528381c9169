"""Area totals for the plan legend."""

from dataclasses import dataclass, field

from floorsketch.domain import Area


@dataclass
class AreaSummary:
    """GLA and non-GLA totals with per-label breakdowns.

    Attributes:
        gla_sq_ft: Total gross living area
        non_gla_sq_ft: Total of all other areas
        gla_breakdown: Square footage per label (GLA areas only)
        non_gla_breakdown: Square footage per label (non-GLA areas only)
    """

    gla_sq_ft: float = 0.0
    non_gla_sq_ft: float = 0.0
    gla_breakdown: dict[str, float] = field(default_factory=dict)
    non_gla_breakdown: dict[str, float] = field(default_factory=dict)

    @property
    def total_sq_ft(self) -> float:
        return self.gla_sq_ft + self.non_gla_sq_ft


def summarize(areas: list[Area]) -> AreaSummary:
    """Total area by GLA flag. Areas sharing a label are combined."""
    summary = AreaSummary()
    for area in areas:
        size = area.area_sq_ft
        label = area.label or area.area_type.display_name
        if area.is_gla:
            summary.gla_sq_ft += size
            summary.gla_breakdown[label] = summary.gla_breakdown.get(label, 0.0) + size
        else:
            summary.non_gla_sq_ft += size
            summary.non_gla_breakdown[label] = summary.non_gla_breakdown.get(label, 0.0) + size
    return summary
