#procurement/services/decision_resolver.py
from __future__ import annotations

from typing import Iterable, Optional

from procurement.models.enums import DecisionType

# quorum never grows past this, however large the organization
QUORUM_CAP = 3


def required_approves(org_size: int) -> int:
    return min(org_size, QUORUM_CAP)


def resolve(decisions: Iterable[DecisionType], required: int) -> Optional[DecisionType]:
    """
    Reduce the votes on one bid to an outcome.

    A single rejection ends the scan: the bid is rejected whatever comes
    after it. Otherwise the bid is approved once `required` approvals are
    counted. None means no outcome yet.
    """
    approves = 0
    for decision in decisions:
        if decision == DecisionType.REJECTED:
            return DecisionType.REJECTED
        if decision == DecisionType.APPROVED:
            approves += 1

    if approves >= required:
        return DecisionType.APPROVED
    return None
