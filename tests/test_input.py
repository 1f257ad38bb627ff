import pytest

from great_heist.engine.intent import Command, CommandKind, Direction, MovementIntent
from great_heist.input import InputAction, InputDevice, InputEvent, InputMapper


@pytest.mark.parametrize(
    "key,action",
    [
        ("w", InputAction.MOVE_UP),
        ("UP", InputAction.MOVE_UP),
        ("s", InputAction.MOVE_DOWN),
        ("Left", InputAction.MOVE_LEFT),
        ("d", InputAction.MOVE_RIGHT),
        ("p", InputAction.PAUSE),
        ("r", InputAction.RESTART),
        ("Return", InputAction.CONFIRM),
        ("RET", InputAction.CONFIRM),
        ("esc", InputAction.BACK),
        ("BACKSPACE", InputAction.DELETE),
        ("7", InputAction.TYPE_DIGIT),
        ("num_3", InputAction.TYPE_DIGIT),
    ],
)
def test_default_bindings(key, action):
    assert InputMapper.default().translate_key(key) is action


def test_unusable_keys_are_ignored():
    mapper = InputMapper.default()
    assert mapper.translate_key("   ") is None
    assert mapper.translate_key(True) is None
    assert mapper.translate_key("F12") is None
    assert mapper.on_key_event("F12", True) is None


def test_digit_events_carry_their_value():
    mapper = InputMapper.default()
    evt = mapper.on_key_event("KEY_4", True)
    assert evt == InputEvent(action=InputAction.TYPE_DIGIT, pressed=True, source="keyboard", value="4")
    assert mapper.on_key_event("W", True).value is None


def test_rebinding_and_int_aliases():
    mapper = InputMapper.default()
    mapper.unbind("W")
    assert mapper.translate_key("W") is None
    mapper.bind("I", InputAction.MOVE_UP)
    assert mapper.translate_key("i") is InputAction.MOVE_UP
    mapper.set_alias(65362, "UP")
    assert mapper.translate_key(65362) is InputAction.MOVE_UP


def test_held_keys_make_a_diagonal_intent():
    device = InputDevice()
    device.key_event("W", True)
    device.key_event("A", True)
    assert device.intent() == MovementIntent(up=True, left=True)
    assert device.intent().axis_deltas(5) == (-5, -5)


def test_opposite_held_keys_cancel():
    device = InputDevice()
    device.key_event("LEFT", True)
    device.key_event("RIGHT", True)
    assert device.intent().axis_deltas(5) == (0, 0)
    device.key_event("LEFT", False)
    assert device.intent() == MovementIntent.from_direction(Direction.RIGHT)


def test_presses_queue_commands_and_releases_do_not():
    device = InputDevice()
    for key in ["P", "R", "ENTER", "ESCAPE", "BACKSPACE", "9"]:
        device.key_event(key, True)
        device.key_event(key, False)
    assert [c.kind for c in device.drain_commands()] == [
        CommandKind.TOGGLE_PAUSE,
        CommandKind.RESTART,
        CommandKind.SUBMIT_CODE,
        CommandKind.ABORT_TERMINAL,
        CommandKind.DELETE_DIGIT,
        CommandKind.ENTER_DIGIT,
    ]
    assert device.drain_commands() == []


def test_digit_press_queues_the_digit():
    device = InputDevice()
    device.key_event("NUM_8", True)
    assert device.drain_commands() == [Command.enter_digit("8")]


def test_release_all_forgets_held_keys():
    device = InputDevice()
    device.key_event("S", True)
    device.key_event("D", True)
    device.release_all()
    assert device.intent().is_idle


def test_unbound_key_returns_none():
    device = InputDevice()
    assert device.key_event("Q", True) is None
    assert device.drain_commands() == []
