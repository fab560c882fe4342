"""Client-side admin gate and the moderation desk."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

import httpx
import pytest

from citizenvoice.sdk import ApiClient, ClientSettings
from citizenvoice.sdk.admin_auth import get_admin_user, has_permission, is_admin
from citizenvoice.sdk.moderation import ModerationDesk
from citizenvoice.sdk.services import ReportsService

from .conftest import Account, create_account


def _offline_rpc_client(email: str, metadata: dict[str, object]) -> ApiClient:
    """A client whose server knows the user but has no ``is_admin`` procedure."""

    user = {
        "id": str(uuid4()),
        "email": email,
        "user_metadata": metadata,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/auth/user":
            return httpx.Response(200, json=user)
        return httpx.Response(404, json={"detail": "Not Found"})

    settings = ClientSettings(api_url="http://api.test", anon_key="key", app_env="development")
    client = ApiClient(settings, http_client=httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(handler)))
    client.auth.set_session("token")
    return client


def test_is_admin_is_false_without_user(sdk_client: ApiClient) -> None:
    assert is_admin(sdk_client) is False


def test_is_admin_trusts_server_over_metadata(sdk_client: ApiClient, admin: Account) -> None:
    create_account("pretender@example.com", user_metadata={"role": "admin"})
    sdk_client.auth.sign_in_with_password("pretender@example.com", "Password123")
    assert is_admin(sdk_client) is False

    sdk_client.auth.sign_in_with_password("moderator@example.com", admin.password)
    assert is_admin(sdk_client) is True


def test_is_admin_falls_back_to_metadata_when_rpc_missing(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)

    assert is_admin(_offline_rpc_client("someone@example.com", {"role": "moderator"})) is True
    assert "falling back to user metadata" in caplog.text
    assert is_admin(_offline_rpc_client("staff@admin.citizenvoice.com", {})) is True
    assert is_admin(_offline_rpc_client("someone@example.com", {"role": "user"})) is False


def test_is_admin_swallows_transport_failures(caplog: pytest.LogCaptureFixture) -> None:
    client = _offline_rpc_client("someone@example.com", {"role": "admin"})

    def explode() -> None:
        raise RuntimeError("boom")

    client.auth.get_user = explode  # type: ignore[method-assign]

    assert is_admin(client) is False
    assert "Error checking admin status" in caplog.text


def test_admin_user_and_permissions() -> None:
    moderator = _offline_rpc_client("mod@example.com", {"role": "moderator", "permissions": ["reports.review"]})
    domain_only = _offline_rpc_client("ops@admin.citizenvoice.com", {})
    root = _offline_rpc_client("root@example.com", {"role": "super_admin"})
    citizen = _offline_rpc_client("citizen@example.com", {})

    admin_user = get_admin_user(moderator)
    assert admin_user is not None
    assert admin_user.role == "moderator"
    assert admin_user.permissions == ("reports.review",)
    assert has_permission(moderator, "reports.review")
    assert not has_permission(moderator, "users.manage")

    domain_admin = get_admin_user(domain_only)
    assert domain_admin is not None and domain_admin.role == "user"

    assert has_permission(root, "anything")
    assert get_admin_user(citizen) is None
    assert not has_permission(citizen, "reports.review")


def _signed_in(sdk_client: ApiClient, account: Account) -> ApiClient:
    result = sdk_client.auth.sign_in_with_password(str(account.user.email), account.password)
    assert result.ok, result.error
    return sdk_client


def test_desk_moderates_reports(sdk_client: ApiClient, admin: Account) -> None:
    for title in ("Flooded underpass", "Fallen tree"):
        sdk_client.request(
            "POST",
            "/reports",
            json={"title": title, "description": "Needs attention from the city.", "is_anonymous": True},
        )
    desk = ModerationDesk(_signed_in(sdk_client, admin))
    assert desk.has_access()

    desk.fetch_reports("pending")
    assert len(desk.reports) == 2
    target = desk.reports[0]
    assert desk.report_actions(target) == ("approved", "rejected")

    outcome = desk.update_report_status(target.id, "approved")

    assert outcome.success
    assert outcome.message == "Report approved successfully"
    assert desk.last_message == outcome.message
    assert len(desk.reports) == 1
    assert target.id not in {report.id for report in desk.reports}

    desk.fetch_reports("all")
    approved = next(report for report in desk.reports if report.id == target.id)
    assert desk.report_actions(approved) == ()

    again = desk.update_report_status(target.id, "rejected")
    assert not again.success
    assert again.message == "Failed to update report: Cannot change report status from approved to rejected"


def test_desk_reports_policy_denial(sdk_client: ApiClient, citizen: Account) -> None:
    created = sdk_client.request(
        "POST",
        "/reports",
        json={"title": "Graffiti", "description": "Graffiti on the library wall.", "is_anonymous": True},
    ).data
    desk = ModerationDesk(_signed_in(sdk_client, citizen))
    assert not desk.has_access()

    outcome = desk.update_report_status(created["id"], "approved")

    assert not outcome.success
    assert outcome.message == (
        'Failed to update report: new row violates row-level security policy for table "reports"'
    )


def test_desk_walks_fact_check_verdicts(sdk_client: ApiClient, admin: Account) -> None:
    created = sdk_client.request("POST", "/fact-checks", json={"title": "Tap water is unsafe"}).data
    desk = ModerationDesk(_signed_in(sdk_client, admin))

    desk.fetch_fact_checks()
    assert [str(item.id) for item in desk.fact_checks] == [created["id"]]
    assert desk.fact_check_actions(desk.fact_checks[0]) == ("in-progress",)

    assert desk.update_fact_check_verdict(created["id"], "in-progress").message == "Fact check in-progress successfully"
    assert desk.fact_check_actions(desk.fact_checks[0]) == ("verified", "disputed", "needs-review")
    assert desk.update_fact_check_verdict(created["id"], "disputed").success

    desk.fetch_fact_checks("disputed")
    assert len(desk.fact_checks) == 1
    assert desk.fact_check_actions(desk.fact_checks[0]) == ()

    locked = desk.update_fact_check_verdict(created["id"], "verified")
    assert not locked.success
    assert locked.message == "Failed to update fact check: Fact check verdict disputed is final and cannot be changed"


def test_reports_service_update_returns_result_tuple(sdk_client: ApiClient, citizen: Account, admin: Account) -> None:
    created = sdk_client.request(
        "POST",
        "/reports",
        json={"title": "Blocked drain", "description": "Water pools after every storm.", "is_anonymous": True},
    ).data
    reports = ReportsService(_signed_in(sdk_client, citizen))

    data, error = reports.update(created["id"], status="approved")
    assert data is None
    assert error is not None
    assert error.code == "42501"
    assert error.status_code == 403

    _signed_in(sdk_client, admin)
    data, error = reports.update(created["id"], status="approved")
    assert error is None
    assert data is not None and data.status == "approved"
