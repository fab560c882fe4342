"""Status and verdict lookup tables for moderated content.

Verdict values must match the ``fact_checks.verdict`` column values:
``queued``, ``in-progress``, ``verified``, ``disputed``, ``needs-review``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

from ..constants import FACT_CHECK_VERDICTS, REPORT_STATUSES

VerdictIcon = Literal["verified", "disputed", "pending", "review"]


@dataclass(frozen=True, slots=True)
class BadgeColor:
    bg: str
    text: str


_NEUTRAL: Final = BadgeColor(bg="bg-gray-100", text="text-gray-700")
_POSITIVE: Final = BadgeColor(bg="bg-green-100", text="text-green-700")
_NEGATIVE: Final = BadgeColor(bg="bg-red-100", text="text-red-700")
_ATTENTION: Final = BadgeColor(bg="bg-yellow-100", text="text-yellow-700")

VERDICT_TRANSITIONS: Final[dict[str, frozenset[str]]] = {
    "queued": frozenset({"in-progress"}),
    "needs-review": frozenset({"in-progress"}),
    "in-progress": frozenset({"verified", "disputed", "needs-review"}),
    "verified": frozenset(),
    "disputed": frozenset(),
}

# in_progress has no generating action in the moderation desk; the server still accepts it.
REPORT_TRANSITIONS: Final[dict[str, frozenset[str]]] = {
    "pending": frozenset({"approved", "rejected", "in_progress"}),
    "in_progress": frozenset({"approved", "rejected"}),
    "approved": frozenset(),
    "rejected": frozenset(),
}

# Ordered the way moderators see the buttons.
_VERDICT_ACTION_ORDER: Final[tuple[str, ...]] = ("in-progress", "verified", "disputed", "needs-review")
REPORT_MODERATION_ACTIONS: Final[dict[str, tuple[str, ...]]] = {"pending": ("approved", "rejected")}

_VERDICT_LABELS: Final[dict[str, str]] = {
    "queued": "Queued",
    "in-progress": "In Progress",
    "verified": "Verified",
    "disputed": "Disputed",
    "needs-review": "Needs Review",
}

_REPORT_LABELS: Final[dict[str, str]] = {
    "pending": "Pending",
    "approved": "Approved",
    "rejected": "Rejected",
    "in_progress": "In Progress",
}


def is_valid_verdict(verdict: str) -> bool:
    return verdict in FACT_CHECK_VERDICTS


def is_valid_report_status(status: str) -> bool:
    return status in REPORT_STATUSES


def get_verdict_label(verdict: str) -> str:
    return _VERDICT_LABELS.get(verdict, verdict)


def get_verdict_color(verdict: str) -> BadgeColor:
    if verdict == "verified":
        return _POSITIVE
    if verdict == "disputed":
        return _NEGATIVE
    if verdict in {"in-progress", "needs-review"}:
        return _ATTENTION
    return _NEUTRAL


def get_verdict_icon(verdict: str) -> VerdictIcon:
    if verdict == "verified":
        return "verified"
    if verdict == "disputed":
        return "disputed"
    if verdict in {"in-progress", "needs-review"}:
        return "review"
    return "pending"


def is_final_verdict(verdict: str) -> bool:
    """Verified and disputed verdicts cannot be changed."""

    return verdict in {"verified", "disputed"}


def can_be_reviewed(verdict: str) -> bool:
    return verdict in {"queued", "needs-review"}


def is_in_progress(verdict: str) -> bool:
    return verdict == "in-progress"


def allowed_verdict_transitions(verdict: str) -> tuple[str, ...]:
    targets = VERDICT_TRANSITIONS.get(verdict, frozenset())
    return tuple(target for target in _VERDICT_ACTION_ORDER if target in targets)


def can_transition_verdict(current: str, target: str) -> bool:
    return target in VERDICT_TRANSITIONS.get(current, frozenset())


def get_report_status_label(status: str) -> str:
    return _REPORT_LABELS.get(status, status)


def get_report_status_color(status: str) -> BadgeColor:
    if status == "approved":
        return _POSITIVE
    if status == "rejected":
        return _NEGATIVE
    return _ATTENTION


def can_transition_report(current: str, target: str) -> bool:
    return target in REPORT_TRANSITIONS.get(current, frozenset())


def report_moderation_actions(status: str) -> tuple[str, ...]:
    """Actions offered to moderators; only pending reports can be approved or rejected."""

    return REPORT_MODERATION_ACTIONS.get(status, ())


def fact_check_moderation_actions(verdict: str) -> tuple[str, ...]:
    return allowed_verdict_transitions(verdict)


__all__ = [
    "BadgeColor",
    "VerdictIcon",
    "VERDICT_TRANSITIONS",
    "REPORT_TRANSITIONS",
    "REPORT_MODERATION_ACTIONS",
    "is_valid_verdict",
    "is_valid_report_status",
    "get_verdict_label",
    "get_verdict_color",
    "get_verdict_icon",
    "is_final_verdict",
    "can_be_reviewed",
    "is_in_progress",
    "allowed_verdict_transitions",
    "can_transition_verdict",
    "get_report_status_label",
    "get_report_status_color",
    "can_transition_report",
    "report_moderation_actions",
    "fact_check_moderation_actions",
]
