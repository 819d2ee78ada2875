from dataclasses import dataclass
from typing import Optional, Union

"""
The closed set of effects a business rule can have on worker ordering.

The rule interpreter resolves each active rule to one of these once per run; the
allocation loop only ever consumes the resolved effect.
"""


@dataclass(frozen=True)
class QualificationOrder:
    """Order workers by qualification rank (highest first when descending)."""

    descending: bool = True
    name = "qualification_order"


@dataclass(frozen=True)
class UtilizationBalance:
    """Order workers by the utilization accumulated so far, least used first."""

    name = "utilization_balance"


@dataclass(frozen=True)
class CostMinimize:
    """Order workers by qualification rank, lowest first."""

    name = "cost_minimize"


@dataclass(frozen=True)
class GroupAffinity:
    """Keep only the largest worker group, when it has more than one member."""

    name = "group_affinity"


@dataclass(frozen=True)
class HighPriorityBoost:
    """Qualification ordering, applied only for high-priority clients."""

    name = "high_priority_boost"


@dataclass(frozen=True)
class Inert:
    """No recognizable effect; the worker order is left untouched."""

    name = "inert"


RuleEffect = Union[
    QualificationOrder,
    UtilizationBalance,
    CostMinimize,
    GroupAffinity,
    HighPriorityBoost,
    Inert,
]

EFFECT_TYPES = (
    QualificationOrder,
    UtilizationBalance,
    CostMinimize,
    GroupAffinity,
    HighPriorityBoost,
    Inert,
)

# keys used in config/constants.json RULE_KEYWORDS and by external classifiers
EFFECTS_BY_NAME = {
    "qualification_desc": QualificationOrder(descending=True),
    "qualification_asc": QualificationOrder(descending=False),
    "qualification_order": QualificationOrder(descending=True),
    "utilization_balance": UtilizationBalance(),
    "cost_minimize": CostMinimize(),
    "group_affinity": GroupAffinity(),
    "high_priority_boost": HighPriorityBoost(),
    "inert": Inert(),
}


def effect_from_name(name: Optional[str]) -> Optional[RuleEffect]:
    """Look up an effect by its name; None for unknown names."""
    if not name:
        return None
    return EFFECTS_BY_NAME.get(str(name).strip().lower())
