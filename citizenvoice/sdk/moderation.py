"""State and actions behind the admin report and fact-check queues."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..domain.verdicts import fact_check_moderation_actions, report_moderation_actions
from ..schemas import FactCheckResponse, ReportResponse
from .admin_auth import is_admin
from .results import Result
from .services import FactChecksService, ReportsService
from .transport import ApiClient

logger = logging.getLogger(__name__)

ALL = "all"
ADMIN_FACT_CHECK_LIMIT = 100


@dataclass(frozen=True, slots=True)
class ModerationOutcome:
    success: bool
    message: str


class ModerationDesk:
    """Mirrors the admin screens: a filter, the fetched rows, and the actions per row."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client
        self._reports = ReportsService(client)
        self._fact_checks = FactChecksService(client)
        self.report_filter: str = ALL
        self.fact_check_filter: str = ALL
        self.reports: list[ReportResponse] = []
        self.fact_checks: list[FactCheckResponse] = []
        self.last_message: str | None = None

    def has_access(self) -> bool:
        return is_admin(self._client)

    def fetch_reports(self, status_filter: str | None = None) -> Result[list[ReportResponse]]:
        if status_filter is not None:
            self.report_filter = status_filter
        result = self._reports.list(status=None if self.report_filter == ALL else self.report_filter)
        if result.error is not None:
            self.last_message = f"Failed to fetch reports: {result.error.message}"
            logger.warning(self.last_message)
            return result
        self.reports = result.data
        return result

    @staticmethod
    def report_actions(report: ReportResponse) -> tuple[str, ...]:
        return report_moderation_actions(report.status)

    def update_report_status(self, report_id: Any, new_status: str) -> ModerationOutcome:
        result = self._reports.update(report_id, status=new_status)
        if result.error is not None:
            outcome = ModerationOutcome(False, f"Failed to update report: {result.error.message}")
        else:
            outcome = ModerationOutcome(True, f"Report {new_status} successfully")
            self.fetch_reports()
        self.last_message = outcome.message
        return outcome

    def fetch_fact_checks(self, verdict_filter: str | None = None) -> Result[list[FactCheckResponse]]:
        if verdict_filter is not None:
            self.fact_check_filter = verdict_filter
        verdict = None if self.fact_check_filter == ALL else self.fact_check_filter
        result = self._fact_checks.list(verdict=verdict, limit=ADMIN_FACT_CHECK_LIMIT)
        if result.error is not None:
            self.last_message = f"Failed to fetch fact checks: {result.error.message}"
            logger.warning(self.last_message)
            return result
        self.fact_checks = result.data
        return result

    @staticmethod
    def fact_check_actions(fact_check: FactCheckResponse) -> tuple[str, ...]:
        return fact_check_moderation_actions(fact_check.verdict)

    def update_fact_check_verdict(self, fact_check_id: Any, verdict: str) -> ModerationOutcome:
        result = self._fact_checks.update(fact_check_id, verdict=verdict)
        if result.error is not None:
            outcome = ModerationOutcome(False, f"Failed to update fact check: {result.error.message}")
        else:
            outcome = ModerationOutcome(True, f"Fact check {verdict} successfully")
            self.fetch_fact_checks()
        self.last_message = outcome.message
        return outcome


__all__ = ["ALL", "ModerationDesk", "ModerationOutcome"]
