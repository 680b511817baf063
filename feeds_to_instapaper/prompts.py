from __future__ import annotations

from typing import Callable, Optional, Protocol

from .exceptions import PromptError

_YES = {"y", "yes"}
_NO = {"n", "no"}


class Confirmer(Protocol):
    def confirm(self, label: str) -> bool:  # pragma: no cover - interface
        ...


class AutoConfirmer:
    """Says yes to everything; used with --auto-add."""

    def confirm(self, label: str) -> bool:
        return True


class ConsoleConfirmer:
    """
    Ask on the terminal and block until the operator answers.

    An empty answer takes the default. Anything that is not yes/no asks again.
    """

    def __init__(self, *, default: bool = True, input_func: Callable[[str], str] = input) -> None:
        self.default = default
        self._input = input_func

    def confirm(self, label: str) -> bool:
        hint = "[Y/n]" if self.default else "[y/N]"
        while True:
            try:
                answer = self._input(f"{label} {hint} ").strip().lower()
            except EOFError as e:
                raise PromptError(f"no answer to {label!r}: standard input is closed") from e
            if not answer:
                return self.default
            if answer in _YES:
                return True
            if answer in _NO:
                return False


def build_confirmer(auto_add: bool, confirmer: Optional[Confirmer] = None) -> Confirmer:
    if auto_add:
        return AutoConfirmer()
    return confirmer or ConsoleConfirmer()
