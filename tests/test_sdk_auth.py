"""Client SDK auth flows exercised against the in-process app."""
from __future__ import annotations

from citizenvoice.sdk import ApiClient, Result, ServiceError
from citizenvoice.sdk.session import AuthWatcher

from .conftest import Account


def test_sign_up_starts_session_and_notifies(sdk_client: ApiClient) -> None:
    events: list[tuple[str, str | None]] = []
    sdk_client.auth.on_auth_state_change(lambda event, session: events.append((event, session and session.user.email)))

    result = sdk_client.auth.sign_up("fresh@example.com", "Password123", {"full_name": "Fresh"})

    assert result.ok
    assert result.data is not None
    assert result.data.user.user_metadata == {"full_name": "Fresh"}
    assert sdk_client.auth.get_session() is result.data
    assert events == [("SIGNED_IN", "fresh@example.com")]


def test_failed_sign_in_returns_error_without_session(sdk_client: ApiClient, citizen: Account) -> None:
    session, error = sdk_client.auth.sign_in_with_password("citizen@example.com", "Wrong1234")

    assert session is None
    assert error == ServiceError("Invalid login credentials", status_code=401)
    assert sdk_client.auth.get_session() is None


def test_get_user_without_session_is_not_an_error(sdk_client: ApiClient) -> None:
    assert sdk_client.auth.get_user() == Result(None)


def test_sign_out_clears_session_once(sdk_client: ApiClient, citizen: Account) -> None:
    events: list[str] = []
    sdk_client.auth.sign_in_with_password("citizen@example.com", citizen.password)
    sdk_client.auth.on_auth_state_change(lambda event, _session: events.append(event))

    sdk_client.auth.sign_out()
    sdk_client.auth.sign_out()

    assert events == ["SIGNED_OUT"]
    assert sdk_client.auth.get_user().data is None


def test_set_session_validates_token(sdk_client: ApiClient, citizen: Account) -> None:
    bad = sdk_client.auth.set_session("garbage")
    assert bad.error is not None
    assert bad.error.status_code == 401
    assert sdk_client.auth.get_session() is None

    good = sdk_client.auth.set_session(citizen.token)
    assert good.data is not None
    assert good.data.email == "citizen@example.com"
    assert sdk_client.auth.get_session() is not None


def test_update_user_requires_session_and_emits(sdk_client: ApiClient, citizen: Account) -> None:
    missing = sdk_client.auth.update_user({"phone": "1"})
    assert missing.error is not None
    assert missing.error.message == "Auth session missing"

    events: list[str] = []
    sdk_client.auth.set_session(citizen.token)
    sdk_client.auth.on_auth_state_change(lambda event, _session: events.append(event))

    updated = sdk_client.auth.update_user({"phone": "555-0100"})

    assert updated.data is not None
    assert updated.data.user_metadata["phone"] == "555-0100"
    assert events == ["USER_UPDATED"]


def test_auth_watcher_keeps_one_subscription(sdk_client: ApiClient, citizen: Account) -> None:
    watcher = AuthWatcher(sdk_client)
    snapshots: list[str | None] = []
    watcher.add_listener(lambda w: snapshots.append(w.user.email if w.user else None))

    watcher.start()
    watcher.start()
    assert sdk_client.auth.listener_count == 1
    assert watcher.is_loading is False
    assert watcher.user is None

    sdk_client.auth.sign_in_with_password("citizen@example.com", citizen.password)
    assert watcher.user is not None and watcher.user.email == "citizen@example.com"

    assert watcher.sign_out() is True
    assert watcher.user is None

    watcher.stop()
    assert sdk_client.auth.listener_count == 0
    sdk_client.auth.sign_in_with_password("citizen@example.com", citizen.password)
    assert watcher.user is None
    assert snapshots[-1] is None


def test_auth_listener_errors_do_not_break_others(sdk_client: ApiClient, citizen: Account) -> None:
    calls: list[str] = []

    def broken(_event: str, _session: object) -> None:
        raise RuntimeError("listener bug")

    sdk_client.auth.on_auth_state_change(broken)
    subscription = sdk_client.auth.on_auth_state_change(lambda event, _session: calls.append(event))

    sdk_client.auth.sign_in_with_password("citizen@example.com", citizen.password)
    subscription.unsubscribe()
    subscription.unsubscribe()
    sdk_client.auth.sign_out()

    assert calls == ["SIGNED_IN"]
    assert not subscription.active


def test_auth_watcher_sign_out_notifies_once(sdk_client: ApiClient, citizen: Account) -> None:
    watcher = AuthWatcher(sdk_client)
    watcher.start()
    sdk_client.auth.sign_in_with_password("citizen@example.com", citizen.password)
    snapshots: list[str | None] = []
    watcher.add_listener(lambda w: snapshots.append(w.user.email if w.user else None))

    assert watcher.sign_out() is True

    assert snapshots == [None]
    watcher.stop()


def test_stopped_auth_watcher_still_clears_user_on_sign_out(sdk_client: ApiClient, citizen: Account) -> None:
    watcher = AuthWatcher(sdk_client)
    sdk_client.auth.sign_in_with_password("citizen@example.com", citizen.password)
    watcher.refresh()
    assert watcher.user is not None
    snapshots: list[str | None] = []
    watcher.add_listener(lambda w: snapshots.append(w.user.email if w.user else None))

    assert watcher.sign_out() is True

    assert watcher.user is None
    assert snapshots == [None]
