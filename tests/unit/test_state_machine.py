# tests/unit/test_state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from unittest.mock import MagicMock, call

import pytest

from minifsm.core.errors import CallbackError
from minifsm.core.state_machine import StateMachine
from tests.machines import Posture, PostureEvent


def test_state_machine_init():
    m = StateMachine("initial", lambda s, e: None)
    assert m.current_state == "initial"
    assert m.previous_state == "initial"
    assert m.name == "StateMachine"


def test_state_machine_keeps_mapper():
    mapper = MagicMock(return_value=None)
    m = StateMachine(0, mapper)
    assert m.mapper is mapper


def test_valid_transition_updates_both_states(posture_machine):
    posture_machine.send(PostureEvent.SIT)
    assert posture_machine.previous_state is Posture.STANDING
    assert posture_machine.current_state is Posture.SITTING


def test_refused_transition_is_noop(posture_machine):
    posture_machine.send(PostureEvent.SIT)
    posture_machine.send(PostureEvent.SIT)
    assert posture_machine.current_state is Posture.SITTING
    assert posture_machine.previous_state is Posture.STANDING


def test_mapper_called_once_per_event():
    mapper = MagicMock(side_effect=[1, None])
    m = StateMachine(0, mapper)
    m.send("a")
    m.send("b")
    assert mapper.call_args_list == [call(0, "a"), call(1, "b")]


def test_same_state_transition_fires_callbacks(spy):
    m = StateMachine("s", lambda s, e: s)
    m.on_transition(spy)
    m.send("e")
    spy.assert_called_once_with("s", "e")
    assert m.previous_state == "s"


def test_falsy_state_is_a_transition(spy):
    m = StateMachine(1, lambda s, e: 0)
    m.on_transition(spy)
    m.send("e")
    assert m.current_state == 0
    spy.assert_called_once_with(0, "e")


def test_on_transition_receives_new_state_and_event(posture_machine, spy):
    posture_machine.on_transition(spy)
    posture_machine.send(PostureEvent.SIT)
    spy.assert_called_once_with(Posture.SITTING, PostureEvent.SIT)


def test_on_transition_not_called_when_refused(posture_machine, spy):
    posture_machine.on_transition(spy)
    posture_machine.send(PostureEvent.STAND)
    spy.assert_not_called()


def test_on_event_always_called_with_current_state(posture_machine, spy):
    posture_machine.on_event(spy)
    posture_machine.send(PostureEvent.STAND)
    posture_machine.send(PostureEvent.SIT)
    assert spy.call_args_list == [
        call(PostureEvent.STAND, Posture.STANDING),
        call(PostureEvent.SIT, Posture.SITTING),
    ]


def test_on_transition_runs_before_on_event(posture_machine, call_log):
    log, recorder = call_log
    posture_machine.on_event(recorder("event"))
    posture_machine.on_transition(recorder("transition"))

    posture_machine.send(PostureEvent.SIT)

    assert [label for label, _ in log] == ["transition", "event"]


def test_callbacks_see_updated_state(posture_machine):
    seen = []
    posture_machine.on_transition(
        lambda state, event: seen.append((posture_machine.previous_state, posture_machine.current_state))
    )
    posture_machine.send(PostureEvent.SIT)
    assert seen == [(Posture.STANDING, Posture.SITTING)]


def test_register_replaces_previous_callback(posture_machine, spy):
    first = MagicMock()
    posture_machine.on_transition(first)
    posture_machine.on_transition(spy)
    posture_machine.on_event(first)
    posture_machine.on_event(spy)

    posture_machine.send(PostureEvent.SIT)

    first.assert_not_called()
    assert spy.call_count == 2


def test_non_exclusive_machine_keeps_all_callbacks(call_log):
    log, recorder = call_log
    m = StateMachine(0, lambda s, e: s + e, exclusive=False)
    m.on_transition(recorder("t1"))
    m.on_transition(recorder("t2"))
    m.on_event(recorder("e1"))
    m.on_event(recorder("e2"))

    m.send(2)

    assert log == [("t1", (2, 2)), ("t2", (2, 2)), ("e1", (2, 2)), ("e2", (2, 2))]


def test_disposed_callback_stops(posture_machine, spy):
    sub = posture_machine.on_event(spy)
    posture_machine.send(PostureEvent.SIT)
    sub.dispose()
    posture_machine.send(PostureEvent.STAND)

    spy.assert_called_once()
    assert posture_machine.current_state is Posture.STANDING


def test_mapper_exception_propagates_without_state_change(spy):
    def mapper(state, event):
        raise ValueError("bad event")

    m = StateMachine("s", mapper)
    m.on_event(spy)
    with pytest.raises(ValueError, match="bad event"):
        m.send("e")
    assert m.current_state == "s"
    spy.assert_not_called()


def test_callback_exception_propagates_after_state_change(spy):
    m = StateMachine(0, lambda s, e: s + 1)
    m.on_transition(MagicMock(side_effect=RuntimeError("hook failed")))
    m.on_event(spy)

    with pytest.raises(RuntimeError, match="hook failed"):
        m.send("e")
    assert m.current_state == 1
    assert m.previous_state == 0
    spy.assert_not_called()


def test_reentrant_send_from_callback():
    m = StateMachine(0, lambda s, e: s + e)
    seen = []

    def on_transition(state, event):
        if event == 1:
            m.send(10)
        seen.append((state, m.current_state))

    m.on_transition(on_transition)
    m.send(1)

    # the nested call finishes first; the outer callback then sees its result
    assert seen == [(11, 11), (1, 11)]
    assert m.current_state == 11
    assert m.previous_state == 1


def test_non_callable_mapper_rejected():
    with pytest.raises(CallbackError, match="mapper"):
        StateMachine(0, "nope")


def test_non_callable_callback_rejected(posture_machine):
    with pytest.raises(TypeError):
        posture_machine.on_transition(None)


def test_transitions_logged(posture_machine, caplog):
    with caplog.at_level(logging.DEBUG, logger="minifsm.core.state_machine"):
        posture_machine.send(PostureEvent.SIT)
        posture_machine.send(PostureEvent.SIT)

    messages = [r.getMessage() for r in caplog.records]
    assert any("posture" in m and "->" in m for m in messages)
    assert any("refused" in m for m in messages)


def test_repr(posture_machine):
    text = repr(posture_machine)
    assert "posture" in text
    assert "STANDING" in text
