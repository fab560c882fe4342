"""Integration tests for fact-check submission and the verdict workflow."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from .conftest import Account


def _submit(client: TestClient, title: str = "The bridge closes next month", **extra: object) -> dict:
    response = client.post("/fact-checks", json={"title": title, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def _set_verdict(client: TestClient, account: Account, fact_check_id: str, verdict: str):
    return client.patch(f"/fact-checks/{fact_check_id}", json={"verdict": verdict}, headers=account.headers)


def test_submission_starts_queued(client: TestClient) -> None:
    attachments = [{"name": "flyer.pdf", "path": "fact-checks/x.pdf", "type": "document"}]

    fact_check = _submit(client, description="Seen on a flyer", attachments=attachments)

    assert fact_check["verdict"] == "queued"
    assert fact_check["user_id"] is None
    assert fact_check["attachments"] == attachments


def test_submission_records_signed_in_user(client: TestClient, citizen: Account) -> None:
    response = client.post("/fact-checks", json={"title": "Schools close on Friday"}, headers=citizen.headers)

    assert response.status_code == 201
    assert response.json()["user_id"] == str(citizen.user.id)
    assert response.json()["attachments"] is None


def test_claim_is_validated(client: TestClient) -> None:
    response = client.post("/fact-checks", json={"title": "abc"})

    assert response.status_code == 422
    assert response.json()["detail"] == "Claim must be at least 5 characters long"


def test_public_feed_is_limited(client: TestClient) -> None:
    for index in range(12):
        _submit(client, title=f"Claim number {index}")

    assert len(client.get("/fact-checks").json()) == 10
    assert len(client.get("/fact-checks", params={"limit": 100}).json()) == 12
    assert client.get("/fact-checks", params={"limit": 101}).status_code == 422
    assert client.get("/fact-checks", params={"limit": 0}).status_code == 422


def test_full_review_cycle(client: TestClient, admin: Account) -> None:
    fact_check = _submit(client)
    fc_id = fact_check["id"]

    assert _set_verdict(client, admin, fc_id, "in-progress").json()["verdict"] == "in-progress"
    assert _set_verdict(client, admin, fc_id, "needs-review").json()["verdict"] == "needs-review"
    assert _set_verdict(client, admin, fc_id, "in-progress").json()["verdict"] == "in-progress"
    assert _set_verdict(client, admin, fc_id, "verified").json()["verdict"] == "verified"

    verified = client.get("/fact-checks", params={"verdict": "verified"}).json()
    assert [item["id"] for item in verified] == [fc_id]


@pytest.mark.parametrize("target", ["verified", "disputed", "needs-review"])
def test_queued_cannot_skip_review(client: TestClient, admin: Account, target: str) -> None:
    fact_check = _submit(client)

    response = _set_verdict(client, admin, fact_check["id"], target)

    assert response.status_code == 409
    assert response.json()["detail"] == f"Cannot change fact check verdict from queued to {target}"


@pytest.mark.parametrize("final", ["verified", "disputed"])
def test_final_verdicts_are_locked(client: TestClient, admin: Account, final: str) -> None:
    fact_check = _submit(client)
    _set_verdict(client, admin, fact_check["id"], "in-progress")
    _set_verdict(client, admin, fact_check["id"], final)

    response = _set_verdict(client, admin, fact_check["id"], "in-progress")

    assert response.status_code == 409
    assert response.json()["detail"] == f"Fact check verdict {final} is final and cannot be changed"


def test_citizens_cannot_set_verdicts(client: TestClient, citizen: Account) -> None:
    fact_check = _submit(client)

    response = _set_verdict(client, citizen, fact_check["id"], "in-progress")

    assert response.status_code == 403
    assert response.json()["detail"] == {
        "message": 'new row violates row-level security policy for table "fact_checks"',
        "code": "42501",
    }


def test_legacy_pending_verdict_is_rejected(client: TestClient, admin: Account) -> None:
    fact_check = _submit(client)

    assert _set_verdict(client, admin, fact_check["id"], "pending").status_code == 422
    assert client.get("/fact-checks", params={"verdict": "pending"}).status_code == 422


def test_missing_fact_check_returns_404(client: TestClient, admin: Account) -> None:
    response = _set_verdict(client, admin, "00000000-0000-0000-0000-000000000000", "in-progress")

    assert response.status_code == 404
