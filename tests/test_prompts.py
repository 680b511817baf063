import pytest

from feeds_to_instapaper.exceptions import PromptError
from feeds_to_instapaper.prompts import AutoConfirmer, ConsoleConfirmer, build_confirmer


def _answers(*replies):
    queue = list(replies)
    asked = []

    def fake_input(prompt):
        asked.append(prompt)
        return queue.pop(0)

    return fake_input, asked


@pytest.mark.parametrize("reply, expected", [("y", True), ("YES", True), ("n", False), (" no ", False), ("", True)])
def test_console_answers(reply, expected):
    fake_input, asked = _answers(reply)
    assert ConsoleConfirmer(input_func=fake_input).confirm('Add "x"?') is expected
    assert asked == ['Add "x"? [Y/n] ']


def test_console_asks_again_on_garbage():
    fake_input, asked = _answers("maybe", "n")
    assert ConsoleConfirmer(input_func=fake_input).confirm("Add?") is False
    assert len(asked) == 2


def test_console_default_no():
    fake_input, asked = _answers("")
    assert ConsoleConfirmer(default=False, input_func=fake_input).confirm("Add?") is False
    assert asked == ["Add? [y/N] "]


def test_closed_stdin_is_an_error():
    def eof(prompt):
        raise EOFError

    with pytest.raises(PromptError):
        ConsoleConfirmer(input_func=eof).confirm("Add?")


def test_build_confirmer():
    assert isinstance(build_confirmer(True), AutoConfirmer)
    assert isinstance(build_confirmer(False), ConsoleConfirmer)
    custom = AutoConfirmer()
    assert build_confirmer(False, custom) is custom
