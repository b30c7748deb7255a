"""Tests for HookRegistry dispatch semantics."""
from __future__ import annotations

from typing import List

import pytest

from compass_config.core.exceptions import ReentrantDispatchError, UndefinedHookError
from compass_config.core.hooks import HookRegistry


class TestDefine:
    def test_define_is_idempotent(self) -> None:
        hooks = HookRegistry()
        hooks.define("saved")
        hooks.on("saved", lambda: None)
        hooks.define("saved")

        assert hooks.events == ("saved",)
        assert len(hooks.listeners("saved")) == 1

    def test_events_given_at_construction(self) -> None:
        hooks = HookRegistry(("saved", "removed"))

        assert hooks.is_defined("saved")
        assert hooks.is_defined("removed")
        assert not hooks.is_defined("error")


class TestFire:
    def test_zero_listeners_is_a_no_op(self) -> None:
        HookRegistry(("saved",)).fire("saved", "screen.css")

    def test_listeners_run_once_in_registration_order(self) -> None:
        hooks = HookRegistry(("saved",))
        calls: List[str] = []
        hooks.on("saved", lambda f: calls.append(f"first:{f}"))
        hooks.on("saved", lambda f: calls.append(f"second:{f}"))

        hooks.fire("saved", "screen.css")

        assert calls == ["first:screen.css", "second:screen.css"]

    def test_decorator_form_returns_the_listener(self) -> None:
        hooks = HookRegistry(("saved",))

        @hooks.on("saved")
        def listener(filename: str) -> None:
            pass

        assert hooks.listeners("saved") == (listener,)

    def test_listener_added_during_dispatch_runs_next_time(self) -> None:
        hooks = HookRegistry(("saved",))
        calls: List[str] = []

        def late(filename: str) -> None:
            calls.append("late")

        def register_late(filename: str) -> None:
            calls.append("early")
            hooks.on("saved", late)

        hooks.on("saved", register_late)
        hooks.fire("saved", "a.css")
        assert calls == ["early"]

        hooks.fire("saved", "a.css")
        assert calls == ["early", "early", "late"]

    def test_undefined_event(self) -> None:
        hooks = HookRegistry()

        with pytest.raises(UndefinedHookError) as exc:
            hooks.fire("saved")
        assert exc.value.context == {"event": "saved"}
        with pytest.raises(UndefinedHookError):
            hooks.on("saved", lambda: None)
        with pytest.raises(LookupError):
            hooks.listeners("saved")

    def test_reentrant_fire_raises(self) -> None:
        hooks = HookRegistry(("saved",))
        hooks.on("saved", lambda: hooks.fire("saved"))

        with pytest.raises(ReentrantDispatchError):
            hooks.fire("saved")

    def test_other_events_may_fire_from_a_listener(self) -> None:
        hooks = HookRegistry(("saved", "generated"))
        calls: List[str] = []
        hooks.on("generated", lambda: calls.append("generated"))
        hooks.on("saved", lambda: hooks.fire("generated"))

        hooks.fire("saved")
        assert calls == ["generated"]

    def test_dispatch_state_resets_after_a_listener_error(self) -> None:
        hooks = HookRegistry(("saved",))
        calls: List[str] = []

        def explode() -> None:
            calls.append("boom")
            raise ValueError("boom")

        hooks.on("saved", explode)
        with pytest.raises(ValueError):
            hooks.fire("saved")
        with pytest.raises(ValueError):
            hooks.fire("saved")

        assert calls == ["boom", "boom"]
