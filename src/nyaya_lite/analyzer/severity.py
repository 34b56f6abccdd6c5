"""Per-query severity adjustment.

Each entity signal may lift a record's severity by one step, checked in a
fixed order against the *current* value, so signals cascade: a Low record in
a query with danger and child signals ends at High (danger lifts it to
Medium, the child check then sees Medium). Emergency is only reachable from
High through the urgency rule, and no query lifts a record more than two
levels above its stored baseline.
"""
from __future__ import annotations

from typing import Dict, List, Tuple

from nyaya_lite.models import EntitySignals, Severity

__all__ = ["SEVERITY_RULES", "SEVERITY_ORDER", "MAX_ESCALATION", "adjust_severity"]

SEVERITY_ORDER = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.EMERGENCY: 3,
}

# (entity flag, one-step upgrades it allows), applied in this order
SEVERITY_RULES: List[Tuple[str, Dict[Severity, Severity]]] = [
    ("has_danger", {Severity.LOW: Severity.MEDIUM, Severity.MEDIUM: Severity.HIGH}),
    ("involves_child", {Severity.LOW: Severity.MEDIUM, Severity.MEDIUM: Severity.HIGH}),
    ("time_urgent", {Severity.HIGH: Severity.EMERGENCY}),
]

MAX_ESCALATION = 2


def adjust_severity(baseline: Severity, entities: EntitySignals) -> Severity:
    """Return the severity to display for this query; never lower than ``baseline``."""
    start = Severity(baseline)
    severity = start
    for flag, upgrades in SEVERITY_RULES:
        if not getattr(entities, flag) or severity not in upgrades:
            continue
        upgraded = upgrades[severity]
        if SEVERITY_ORDER[upgraded] - SEVERITY_ORDER[start] > MAX_ESCALATION:
            continue
        severity = upgraded
    return severity
