from __future__ import annotations

from pingboard.models.status import ApplicationStatus
from pingboard.state.events import Delta, Snapshot
from pingboard.state.store import LOADING, ClientState, StateStore


def _status(app: str, is_ok: bool, **extra: object) -> ApplicationStatus:
    return ApplicationStatus.model_validate({"app": app, "isOk": is_ok, **extra})


def _snapshot(*pairs: tuple[str, bool]) -> Snapshot:
    return Snapshot(statuses=tuple(_status(app, ok) for app, ok in pairs))


def _apps(store: StateStore) -> list[tuple[str, bool]]:
    state = store.state
    assert state is not LOADING
    return [(s.app, s.is_ok) for s in state]


def test_initial_state_is_loading() -> None:
    store = StateStore()

    assert store.state is LOADING
    assert not store.is_ready
    assert store.get("svc-a") is None


def test_snapshot_replaces_collection_verbatim() -> None:
    store = StateStore()
    store.apply_message(_snapshot(("svc-a", True), ("svc-b", False)))
    store.apply_message(_snapshot(("svc-c", True), ("svc-a", False)))

    assert _apps(store) == [("svc-c", True), ("svc-a", False)]


def test_empty_snapshot_is_ready_but_has_no_rows() -> None:
    store = StateStore()
    store.apply_message(Snapshot(statuses=()))

    assert store.is_ready
    assert store.state == ()


def test_delta_updates_existing_entry_in_place() -> None:
    store = StateStore()
    store.apply_message(_snapshot(("svc-a", True), ("svc-b", False), ("svc-c", True)))

    store.apply_message(Delta(status=_status("svc-b", True)))

    assert _apps(store) == [("svc-a", True), ("svc-b", True), ("svc-c", True)]


def test_delta_for_unknown_app_is_appended() -> None:
    store = StateStore()
    store.apply_message(_snapshot(("svc-a", True), ("svc-b", False)))

    store.apply_message(Delta(status=_status("svc-c", True)))

    assert _apps(store) == [("svc-a", True), ("svc-b", False), ("svc-c", True)]


def test_delta_before_snapshot_starts_from_empty_collection() -> None:
    store = StateStore()

    store.apply_message(Delta(status=_status("svc-a", True)))

    assert _apps(store) == [("svc-a", True)]


def test_applying_same_delta_twice_is_idempotent() -> None:
    store = StateStore()
    store.apply_message(_snapshot(("svc-a", True), ("svc-b", False)))
    delta = Delta(status=_status("svc-c", False))

    once = store.apply_message(delta)
    twice = store.apply_message(delta)

    assert once == twice


def test_keys_stay_unique_across_mixed_messages() -> None:
    store = StateStore()
    messages = [
        Delta(status=_status("svc-a", True)),
        Delta(status=_status("svc-a", False)),
        _snapshot(("svc-b", True), ("svc-a", True)),
        Delta(status=_status("svc-b", False)),
        Delta(status=_status("svc-c", True)),
        Delta(status=_status("svc-c", False)),
    ]
    for message in messages:
        store.apply_message(message)
        apps = [app for app, _ in _apps(store)]
        assert len(apps) == len(set(apps))

    assert _apps(store) == [("svc-b", False), ("svc-a", True), ("svc-c", False)]


def test_extra_fields_are_kept_on_stored_status() -> None:
    store = StateStore()
    store.apply_message(Delta(status=_status("svc-a", True, region="eu", latencyMs=12)))

    status = store.get("svc-a")
    assert status is not None
    assert status.to_wire() == {"app": "svc-a", "isOk": True, "region": "eu", "latencyMs": 12}


def test_subscribers_notified_once_per_message() -> None:
    store = StateStore()
    seen_a: list[ClientState] = []
    seen_b: list[ClientState] = []
    store.subscribe(seen_a.append)
    store.subscribe(seen_b.append)

    store.apply_message(_snapshot(("svc-a", True)))
    store.apply_message(Delta(status=_status("svc-a", False)))

    assert len(seen_a) == 2
    assert len(seen_b) == 2
    assert seen_a[-1] == store.state


def test_unsubscribe_stops_notifications() -> None:
    store = StateStore()
    seen: list[ClientState] = []
    unsubscribe = store.subscribe(seen.append)

    store.apply_message(_snapshot(("svc-a", True)))
    unsubscribe()
    unsubscribe()
    store.apply_message(_snapshot(("svc-b", True)))

    assert len(seen) == 1


def test_failing_listener_does_not_block_others() -> None:
    store = StateStore()
    seen: list[ClientState] = []

    def _boom(_state: ClientState) -> None:
        raise RuntimeError("listener failed")

    store.subscribe(_boom)
    store.subscribe(seen.append)

    store.apply_message(_snapshot(("svc-a", True)))

    assert len(seen) == 1
    assert store.get("svc-a") is not None


def test_loading_sentinel_is_falsy_singleton() -> None:
    assert not LOADING
    assert repr(LOADING) == "LOADING"
    assert type(LOADING)() is LOADING
