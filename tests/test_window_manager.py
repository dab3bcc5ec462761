"""Window manager state machine tests."""

from __future__ import annotations

import random
from typing import Any

import pytest

from core.event_bus import (
    FOCUS_CHANGED,
    WINDOW_CLOSED,
    WINDOW_SPAWNED,
    WORKSPACE_CHANGED,
    EventBus,
)
from wm.id_source import CounterIdSource, RandomIdSource
from wm.layout_engine import LayoutMode, Rect
from wm.window_manager import WindowManager
from world_model.desktop_state import WindowKind


class RepeatingIdSource:
    """Hands out the same id forever."""

    def next_id(self) -> str:
        return "dup"


def build_wm(bus: EventBus | None = None) -> WindowManager:
    return WindowManager(id_source=CounterIdSource(), event_bus=bus)


def assert_invariants(wm: WindowManager) -> None:
    ids = [w.id for w in wm.windows]
    assert len(ids) == len(set(ids))
    if not ids:
        assert wm.active_id is None
    if wm.active_id is not None:
        assert wm.active_id in ids
        assert wm.workspace_of(wm.active_id) == wm.active_workspace


def test_spawn_appends_and_focuses() -> None:
    wm = build_wm()
    first = wm.spawn_window(WindowKind.TERMINAL)
    second = wm.spawn_window("browser")

    assert [w.id for w in wm.windows] == ["w1", "w2"]
    assert first.title == "~/user/projects"
    assert second.title == "browser"
    assert second.kind is WindowKind.BROWSER
    assert wm.active_id == "w2"


def test_spawn_rejects_unknown_kind() -> None:
    wm = build_wm()
    with pytest.raises(ValueError):
        wm.spawn_window("calculator")
    assert wm.windows == ()


def test_close_active_focuses_last_remaining() -> None:
    wm = build_wm()
    a = wm.spawn_window(WindowKind.TERMINAL)
    b = wm.spawn_window(WindowKind.BROWSER)
    wm.focus_window(a.id)

    assert wm.close_window(a.id) is True
    assert wm.active_id == b.id
    assert_invariants(wm)


def test_close_inactive_keeps_focus() -> None:
    wm = build_wm()
    a = wm.spawn_window(WindowKind.TERMINAL)
    b = wm.spawn_window(WindowKind.BROWSER)
    c = wm.spawn_window(WindowKind.SETTINGS)

    wm.close_window(a.id)

    assert wm.active_id == c.id
    assert [w.id for w in wm.windows] == [b.id, c.id]


def test_close_last_window_unsets_active() -> None:
    wm = build_wm()
    a = wm.spawn_window(WindowKind.TERMINAL)

    wm.close_window(a.id)

    assert wm.windows == ()
    assert wm.active_id is None


def test_close_unknown_id_is_noop() -> None:
    wm = build_wm()
    wm.spawn_window(WindowKind.TERMINAL)

    assert wm.close_window("nope") is False
    assert len(wm.windows) == 1
    assert wm.active_id == "w1"


def test_close_active_window_without_focus_is_noop() -> None:
    wm = build_wm()
    assert wm.close_active_window() is False


def test_focus_does_not_reorder() -> None:
    wm = build_wm()
    a = wm.spawn_window(WindowKind.TERMINAL)
    wm.spawn_window(WindowKind.BROWSER)

    assert wm.focus_window(a.id) is True
    assert wm.active_id == a.id
    assert [w.id for w in wm.windows] == ["w1", "w2"]
    assert wm.focus_window("missing") is False
    assert wm.active_id == a.id


def test_ids_never_reused_after_close() -> None:
    wm = build_wm()
    seen: set[str] = set()
    for _ in range(5):
        window = wm.spawn_window(WindowKind.TERMINAL)
        assert window.id not in seen
        seen.add(window.id)
        wm.close_window(window.id)


def test_random_sequence_preserves_invariants() -> None:
    rng = random.Random(7)
    wm = WindowManager(id_source=RandomIdSource(rng=random.Random(1)))
    every_id: list[str] = []
    for _ in range(300):
        op = rng.choice(["spawn", "spawn", "close", "close_active", "focus", "ws", "move"])
        ids = [w.id for w in wm.windows]
        if op == "spawn":
            every_id.append(wm.spawn_window(rng.choice(list(WindowKind))).id)
        elif op == "close" and ids:
            wm.close_window(rng.choice(ids))
        elif op == "close_active":
            wm.close_active_window()
        elif op == "focus" and ids:
            wm.focus_window(rng.choice(ids))
        elif op == "ws":
            wm.set_active_workspace(rng.randint(0, 6))
        elif op == "move" and ids:
            wm.move_window_to_workspace(rng.choice(ids), rng.randint(1, 5))
        assert_invariants(wm)
    assert len(every_id) == len(set(every_id))


def test_duplicate_ids_from_source_are_refused() -> None:
    wm = WindowManager(id_source=RepeatingIdSource())
    wm.spawn_window(WindowKind.TERMINAL)

    with pytest.raises(RuntimeError):
        wm.spawn_window(WindowKind.TERMINAL)
    assert len(wm.windows) == 1


@pytest.mark.parametrize("bad", [0, 6, 7, -1, True, 2.0, "3", None])
def test_out_of_range_workspace_rejected(bad: Any) -> None:
    wm = build_wm()
    wm.set_active_workspace(2)

    assert wm.set_active_workspace(bad) is False
    assert wm.active_workspace == 2


def test_workspace_scopes_visible_windows() -> None:
    wm = build_wm()
    a = wm.spawn_window(WindowKind.TERMINAL)
    wm.set_active_workspace(2)

    assert wm.active_id is None
    assert wm.visible_windows() == []

    b = wm.spawn_window(WindowKind.BROWSER)
    assert wm.visible_windows() == [b]
    assert wm.workspace_windows(1) == [a]

    wm.set_active_workspace(1)
    assert wm.active_id == a.id
    assert wm.visible_windows() == [a]


def test_focus_hidden_window_switches_workspace() -> None:
    wm = build_wm()
    a = wm.spawn_window(WindowKind.TERMINAL)
    wm.set_active_workspace(3)
    wm.spawn_window(WindowKind.BROWSER)

    assert wm.focus_window(a.id) is True
    assert wm.active_workspace == 1
    assert wm.active_id == a.id


def test_close_active_falls_back_within_workspace() -> None:
    wm = build_wm()
    wm.spawn_window(WindowKind.TERMINAL)
    wm.set_active_workspace(2)
    b = wm.spawn_window(WindowKind.BROWSER)

    wm.close_window(b.id)

    assert wm.active_id is None
    assert len(wm.windows) == 1


def test_move_active_window_to_other_workspace() -> None:
    wm = build_wm()
    a = wm.spawn_window(WindowKind.TERMINAL)
    b = wm.spawn_window(WindowKind.BROWSER)

    assert wm.move_active_to_workspace(4) is True
    assert wm.workspace_of(b.id) == 4
    assert wm.active_id == a.id
    assert wm.visible_windows() == [a]
    assert wm.move_window_to_workspace(a.id, 9) is False
    assert wm.move_window_to_workspace("missing", 2) is False


def test_focus_cycles_through_visible_windows() -> None:
    wm = build_wm()
    a = wm.spawn_window(WindowKind.TERMINAL)
    b = wm.spawn_window(WindowKind.BROWSER)
    c = wm.spawn_window(WindowKind.SETTINGS)

    wm.focus_next()
    assert wm.active_id == a.id
    wm.focus_prev()
    assert wm.active_id == c.id
    wm.focus_prev()
    assert wm.active_id == b.id


def test_focus_cycle_on_empty_workspace() -> None:
    wm = build_wm()
    assert wm.focus_next() is False


def test_cycle_layout_and_master_ratio() -> None:
    wm = build_wm()

    assert wm.cycle_layout() is LayoutMode.MONOCLE
    assert wm.cycle_layout() is LayoutMode.GRID
    assert wm.cycle_layout() is LayoutMode.MASTER_STACK
    assert wm.adjust_master_ratio(0.1) == pytest.approx(0.6)
    assert wm.adjust_master_ratio(5) == pytest.approx(0.9)
    assert wm.adjust_master_ratio(-5) == pytest.approx(0.1)


def test_arrange_lays_out_visible_windows_only() -> None:
    wm = build_wm()
    a = wm.spawn_window(WindowKind.TERMINAL)
    b = wm.spawn_window(WindowKind.BROWSER)
    wm.move_window_to_workspace(b.id, 2)

    placed = wm.arrange(Rect(0, 0, 800, 600), gap=10, padding=20)

    assert placed == [(a, Rect(20, 20, 760, 560))]


def test_events_are_emitted_in_order() -> None:
    bus = EventBus()
    seen: list[tuple[str, dict[str, Any]]] = []
    for name in (WINDOW_SPAWNED, WINDOW_CLOSED, FOCUS_CHANGED, WORKSPACE_CHANGED):
        bus.subscribe(name, lambda payload, name=name: seen.append((name, payload)))
    wm = build_wm(bus)

    wm.spawn_window(WindowKind.TERMINAL)
    wm.close_active_window()
    wm.set_active_workspace(2)

    assert [name for name, _ in seen] == [
        WINDOW_SPAWNED,
        FOCUS_CHANGED,
        WINDOW_CLOSED,
        FOCUS_CHANGED,
        WORKSPACE_CHANGED,
    ]
    assert seen[0][1] == {"id": "w1", "kind": "terminal", "workspace": 1}
    assert seen[3][1] == {"from": "w1", "to": None}


def test_state_snapshot() -> None:
    wm = build_wm()
    wm.spawn_window(WindowKind.WELCOME)

    snapshot = wm.state_snapshot()

    assert snapshot["active_id"] == "w1"
    assert snapshot["windows"] == [
        {"id": "w1", "title": "welcome", "kind": "welcome", "workspace": 1}
    ]
    assert snapshot["layout_mode"] == "master_stack"
