from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from pytoggle import ChangeType, StateChanges, Toggle, ToggleConfig, ToggleConfigError


class _Spy:
    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def __call__(self, *args: Any) -> None:
        self.calls.append(args)


def test_uncontrolled_toggle_flips_and_reports() -> None:
    on_toggle = _Spy()
    toggle = Toggle(initial_on=False, on_toggle=on_toggle)

    toggle.toggle()

    assert on_toggle.calls == [(True,)]
    assert toggle.get_state() == {"on": True}


def test_controlled_toggle_reports_would_be_value() -> None:
    on_toggle = _Spy()
    on_state_change = _Spy()
    toggle = Toggle(on=True, on_toggle=on_toggle, on_state_change=on_state_change)

    toggle.toggle()

    assert toggle.get_state()["on"] is True
    assert toggle.is_controlled("on")
    assert on_toggle.calls == [(False,)]
    changes, _helpers = on_state_change.calls[0]
    assert changes.to_dict() == {"type": "toggle", "on": False}


def test_reducer_can_pin_uncontrolled_field() -> None:
    on_state_change = _Spy()

    def _always_on(state: dict[str, Any], changes: StateChanges) -> StateChanges:
        return changes.with_values(on=True)

    toggle = Toggle(initial_on=True, state_reducer=_always_on, on_state_change=on_state_change)

    toggle.toggle()

    assert toggle.get_state()["on"] is True
    assert on_state_change.calls[0][0].to_dict() == {"type": "toggle", "on": True}


def test_reducer_can_limit_toggles_by_type() -> None:
    clicks = {"count": 0}

    def _limit(state: dict[str, Any], changes: StateChanges) -> StateChanges:
        if changes.type == ChangeType.TOGGLE:
            clicks["count"] += 1
            if clicks["count"] > 2:
                return changes.with_values(on=state["on"])
        return changes

    toggle = Toggle(state_reducer=_limit)
    for _ in range(3):
        toggle.toggle()
    assert toggle.get_state()["on"] is False

    toggle.toggle(type="force")
    assert toggle.get_state()["on"] is True


def test_toggle_options_reach_notifications_but_not_state() -> None:
    on_state_change = _Spy()
    toggle = Toggle(on_state_change=on_state_change)

    toggle.toggle(type="keyboard", key="space")

    assert on_state_change.calls[0][0].to_dict() == {"type": "keyboard", "key": "space", "on": True}
    assert toggle.get_state() == {"on": True}


@pytest.mark.parametrize("initial_on", [False, True])
def test_reset_restores_initial_state_idempotently(initial_on: bool) -> None:
    on_reset = _Spy()
    toggle = Toggle(initial_on=initial_on, on_reset=on_reset)
    toggle.toggle()

    toggle.reset()
    first = toggle.get_state()
    toggle.reset()

    assert first == {"on": initial_on}
    assert toggle.get_state() == first
    assert on_reset.calls == [(initial_on,), (initial_on,)]


def test_reset_on_controlled_field_notifies_without_mutation() -> None:
    on_state_change = _Spy()
    on_reset = _Spy()
    toggle = Toggle(initial_on=False, on=True, on_state_change=on_state_change, on_reset=on_reset)

    toggle.reset()

    assert on_state_change.calls[0][0].to_dict() == {"type": "reset", "on": False}
    assert on_reset.calls == [(False,)]
    assert toggle.get_state() == {"on": True}
    # Releasing control exposes the untouched internal value.
    toggle.receive_overrides(on=None)
    assert toggle.get_state() == {"on": False}


def test_state_change_receives_helper_snapshot() -> None:
    captured: list[Mapping[str, Any]] = []
    toggle = Toggle(on_state_change=lambda changes, helpers: captured.append(helpers))

    toggle.toggle()

    helpers = captured[0]
    assert helpers["on"] is True
    assert helpers["toggle"] == toggle.toggle
    assert callable(helpers["get_toggler_props"])


def test_toggler_props_multiplexes_on_click() -> None:
    order: list[str] = []
    toggle = Toggle(on_toggle=lambda on: order.append(f"toggle:{on}"))

    props = toggle.get_toggler_props({"on_click": lambda event: order.append(f"caller:{event}")})
    props["on_click"]("click")

    assert order == ["caller:click", "toggle:True"]


def test_toggler_props_caller_fields_win_except_on_click() -> None:
    toggle = Toggle(initial_on=True)

    props = toggle.get_toggler_props(aria_pressed="mixed", id="power", on_click=None)

    assert props["aria_pressed"] == "mixed"
    assert props["id"] == "power"
    props["on_click"]()
    assert toggle.get_state()["on"] is False


def test_toggler_props_reflect_merged_state() -> None:
    toggle = Toggle(initial_on=False, on=True)

    assert toggle.get_toggler_props()["aria_pressed"] is True


def test_shared_owner_keeps_two_controlled_toggles_in_sync() -> None:
    owner = {"both_on": False}
    toggles: list[Toggle] = []

    def _handle_toggle(on: bool) -> None:
        owner["both_on"] = on
        for item in toggles:
            item.receive_overrides(on=on)

    toggles.extend(Toggle(on=owner["both_on"], on_toggle=_handle_toggle) for _ in range(2))

    toggles[0].toggle()
    assert [t.get_state()["on"] for t in toggles] == [True, True]

    toggles[1].toggle()
    assert [t.get_state()["on"] for t in toggles] == [False, False]


def test_render_props_receive_state_and_helpers() -> None:
    toggle = Toggle()

    label = toggle.render(lambda ctx: "on" if ctx["on"] else "off")
    toggle.render(lambda ctx: ctx["toggle"]())

    assert label == "off"
    assert toggle.render(lambda ctx: ctx["on"]) is True


def test_config_object_and_keyword_overrides_combine() -> None:
    config = ToggleConfig(initial_on=True)

    toggle = Toggle(config, on_toggle=_Spy())

    assert toggle.initial_state == {"on": True}
    assert toggle.config.initial_on is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"on_toggle": "not callable"},
        {"unknown_option": 1},
    ],
)
def test_invalid_options_raise_config_error(kwargs: dict[str, Any]) -> None:
    with pytest.raises(ToggleConfigError):
        Toggle(**kwargs)


def test_callback_errors_propagate() -> None:
    def _boom(on: bool) -> None:
        raise RuntimeError("boom")

    toggle = Toggle(on_toggle=_boom)

    with pytest.raises(RuntimeError):
        toggle.toggle()
    # The transition itself completed before the callback ran.
    assert toggle.get_state()["on"] is True


def test_overrides_mapping_controls_on_without_keyword() -> None:
    on_toggle = _Spy()
    toggle = Toggle(initial_on=False, overrides={"on": True}, on_toggle=on_toggle)

    assert toggle.is_controlled("on")
    assert toggle.get_state() == {"on": True}

    toggle.toggle()

    assert toggle.get_state() == {"on": True}
    assert on_toggle.calls == [(False,)]


def test_on_keyword_wins_over_overrides_mapping() -> None:
    toggle = Toggle(overrides={"on": True, "label": "Power"}, on=False)

    assert toggle.get_state() == {"on": False}
