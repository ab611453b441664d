"""Input builder tests: the key-press state machine.

Covers expression composition (implicit multiplication, operator replacement,
decimal points), atomic backspace, evaluation and error recovery, angle mode
and clear.
"""

import pytest

from scicalc.builder import Calculator, apply
from scicalc.keypad import token_event
from scicalc.models import AngleMode, CalculatorState, Event, EventKind, Phase
from scicalc.tokenizer import tokenize


def press(*keys, angle_mode=AngleMode.DEGREES):
    calc = Calculator(angle_mode=angle_mode)
    for key in keys:
        calc.press(token_event(key))
    return calc.state


@pytest.fixture
def calc():
    return Calculator()


# --- Initial state ---

def test_initial_state(calc):
    state = calc.state
    assert state.expression == ""
    assert state.display == "0"
    assert state.preview == ""
    assert state.last_answer == 0.0
    assert state.phase is Phase.COMPOSING
    assert not state.just_evaluated


def test_apply_is_pure():
    state = CalculatorState()
    after = apply(state, Event(EventKind.DIGIT, "7"))
    assert state.expression == ""
    assert after.expression == "7"


# --- Digits and decimal points ---

def test_digits_build_a_number():
    state = press("1", "2")
    assert state.expression == "12"
    assert state.display == "12"


def test_leading_zero_is_replaced():
    assert press("0", "5").expression == "5"
    assert press("3", "+", "0", "7").expression == "3+7"


def test_decimal_point_gets_leading_zero():
    assert press(".").expression == "0."
    assert press("3", "+", ".").expression == "3+0."
    assert press("(", ".", "5").expression == "(0.5"


def test_second_decimal_point_ignored():
    assert press("1", ".", "5", ".").expression == "1.5"


def test_digit_after_operator_starts_new_number():
    state = press("1", "2", "+", "3")
    assert state.expression == "12+3"
    assert state.display == "3"


# --- Implicit multiplication ---

def test_function_after_digit():
    state = press("2", "sin")
    assert state.expression == "2*sin("
    assert state.display == "sin("
    assert state.preview == "2×sin("


def test_constant_and_variable_after_value():
    assert press("3", "pi").expression == "3*pi"
    assert press("3", "Ans").expression == "3*Ans"
    assert press("5", "!", "pi").expression == "5!*pi"


def test_open_paren_after_value():
    assert press("2", "(").expression == "2*("
    assert press("(", "1", ")", "(").expression == "(1)*("


def test_digit_after_closed_value():
    assert press("pi", "2").expression == "pi*2"
    assert press("(", "1", ")", "2").expression == "(1)*2"


def test_no_implicit_multiply_after_operator():
    state = press("2", "+", "sqrt")
    assert state.expression == "2+sqrt("
    assert state.preview == "2+√("


# --- Operators ---

def test_operator_replaces_trailing_operator():
    assert press("3", "+", "-").expression == "3-"
    assert press("3", "+", "*").expression == "3*"
    assert press("3", "-", "/").expression == "3/"


def test_minus_after_multiplicative_operator_is_a_sign():
    assert press("3", "*", "-").expression == "3*-"
    assert press("2", "^", "-").expression == "2^-"


def test_sign_is_not_stacked():
    assert press("3", "*", "-", "-").expression == "3*-"
    assert press("3", "*", "-", "+").expression == "3+"


def test_only_minus_starts_an_expression():
    assert press("+").expression == ""
    assert press("*").expression == ""
    assert press("-").expression == "-"
    assert press("-", "+").expression == "-"


def test_only_minus_after_open_paren():
    assert press("(", "*").expression == "("
    assert press("(", "-").expression == "(-"


def test_postfix_appends_to_value():
    assert press("5", "!").expression == "5!"
    assert press("5", "%").expression == "5%"
    assert press("!").expression == ""


def test_close_paren_appended_unconditionally():
    assert press("3", ")").expression == "3)"


# --- Backspace ---

def test_backspace_removes_one_character():
    state = press("1", "2", "backspace")
    assert state.expression == "1"
    assert state.display == "1"


def test_backspace_removes_whole_tokens():
    assert press("2", "sin", "backspace").expression == "2*"
    assert press("sqrt", "backspace").expression == ""
    assert press("ln", "backspace").expression == ""
    assert press("1", "+", "Ans", "backspace").expression == "1+"
    assert press("pi", "backspace").expression == ""


def test_backspace_restores_entry_display():
    assert press("1", "2", "+", "3", "backspace").display == "12"
    assert press("pi", "+", "backspace").display == "π"
    assert press("backspace").display == "0"


# --- Evaluate ---

def test_evaluate_success():
    state = press("3", "+", "4", "*", "2", "=")
    assert state.display == "11"
    assert state.expression == "11"
    assert state.last_answer == pytest.approx(11.0)
    assert state.preview == "3+4×2 ="
    assert state.just_evaluated


def test_operator_continues_from_result():
    state = press("3", "+", "4", "=", "*", "2", "=")
    assert state.display == "14"


def test_digit_after_result_starts_fresh():
    state = press("2", "+", "3", "=", "7")
    assert state.expression == "7"
    assert state.display == "7"
    assert state.phase is Phase.COMPOSING


def test_implicit_multiply_through_builder():
    assert press("2", "sin", "9", "0", ")", "=").display == "2"


def test_ans_uses_last_result():
    assert press("6", "*", "7", "=", "2", "*", "Ans", "=").display == "84"


def test_evaluate_empty_expression_uses_display():
    state = press("=")
    assert state.display == "0"
    assert state.just_evaluated


def test_factorial_through_builder():
    assert press("5", "!", "=").display == "120"
    assert press("3", ".", "5", "!", "=").display == "Error"


# --- Errors and recovery ---

def test_error_keeps_last_answer():
    state = press("6", "*", "7", "=", "1", "/", "0", "=")
    assert state.display == "Error"
    assert state.last_answer == pytest.approx(42.0)
    assert state.just_evaluated


def test_error_preserves_expression_until_digit():
    state = press("(", "3", "+", "4", "=")
    assert state.display == "Error"
    assert state.expression == "(3+4"
    assert state.preview == "(3+4 ="


def test_error_can_be_repaired():
    assert press("(", "3", "+", "4", "=", ")", "=").display == "7"


def test_digit_after_error_starts_fresh():
    state = press("3", "+", ")", "=", "5")
    assert state.phase is Phase.COMPOSING
    assert state.expression == "5"
    assert state.display == "5"


# --- Scientific results ---

BIG = ("9",) * 13 + ("=",)  # 9999999999999 -> "1.00000000e+13"
TINY = ("0", ".") + ("0",) * 9 + ("1", "=")  # 1e-10 -> "1.00000000e-10"


def test_scientific_result_becomes_expression():
    assert press(*BIG).expression == "1.00000000e+13"
    assert press(*TINY).expression == "1.00000000e-10"


def test_backspace_drops_dangling_exponent():
    assert press(*BIG, "backspace").expression == "1.00000000e+1"
    assert press(*BIG, "backspace", "backspace").expression == "1.00000000"
    assert press(*TINY, "backspace", "backspace").expression == "1.00000000"


def test_decimal_point_refused_in_exponent():
    assert press(*BIG, "backspace", ".").expression == "1.00000000e+1"
    assert press(*BIG, "backspace", "5").expression == "1.00000000e+15"


def test_operator_after_trimmed_exponent():
    assert press(*BIG, "backspace", "backspace", "*").expression == "1.00000000*"


def test_chaining_from_scientific_result():
    assert press(*BIG, "*", "2", "=").display == "2.00000000e+13"
    assert press(*TINY, "+", "1", "=").display == "1.0000000001"


@pytest.mark.parametrize("keys", [
    BIG + ("backspace", "backspace", "*", "2", "="),
    BIG + ("backspace", ".", "5", "="),
    BIG + ("backspace", "backspace", "backspace", ".", "!", "="),
    BIG + ("*", "-", "backspace", "backspace", "backspace", "sin", "backspace", "%"),
    BIG + ("/", "3", "=", "backspace", "-", "pi", "="),
    TINY + ("backspace", "backspace", "backspace", "+", "(", "2", ")", "="),
    TINY + ("^", "2", "=", "backspace", "backspace", "Ans", "="),
    TINY + (")", "backspace", "backspace", "backspace", ".", "0", "="),
])
def test_expression_always_tokenizes(keys):
    calc = Calculator()
    for key in keys:
        state = calc.press(token_event(key))
        if state.expression:
            tokenize(state.expression)


# --- Angle mode and clear ---

def test_angle_mode_toggle_applies_at_evaluation():
    calc = Calculator()
    for key in ("sin", "9", "0", ")"):
        calc.press(token_event(key))
    calc.press(Event(EventKind.TOGGLE_ANGLE_MODE))
    assert calc.angle_mode is AngleMode.RADIANS
    calc.press(Event(EventKind.EVALUATE))
    assert calc.display == "0.8939966636"


def test_degrees_by_default():
    assert press("sin", "9", "0", ")", "=").display == "1"


def test_clear_resets_but_keeps_angle_mode():
    state = press("6", "*", "7", "=", "clear", angle_mode=AngleMode.RADIANS)
    assert state == CalculatorState(angle_mode=AngleMode.RADIANS)
    assert state.last_answer == 0.0


def test_state_to_dict():
    state = press("2", "+", "3", "=")
    assert state.to_dict() == {
        "expression": "5",
        "display": "5",
        "preview": "2+3 =",
        "last_answer": 5.0,
        "angle_mode": "deg",
        "phase": "just_evaluated",
    }


def test_snapshot(calc):
    calc.press_all([Event(EventKind.DIGIT, "4"), Event(EventKind.FUNCTION, "sqrt")])
    assert calc.snapshot() == {"display": "√(", "preview": "4×√(", "angle_mode": "deg"}


# --- Invalid payloads ---

@pytest.mark.parametrize("event", [
    Event(EventKind.DIGIT, "x"),
    Event(EventKind.DIGIT, None),
    Event(EventKind.OPERATOR, "!"),
    Event(EventKind.FUNCTION, "exp"),
    Event(EventKind.POSTFIX, "+"),
])
def test_invalid_payload_raises(event):
    with pytest.raises(ValueError):
        apply(CalculatorState(), event)
