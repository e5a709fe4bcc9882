"""
Front-end side of a check.

A front end implements `View`; `CheckPresenter` drives it for one
user-triggered check: validate, show busy, await the scan, hide busy,
show the result or the error.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol

from .checker import InvalidInput, PalindromeChecker
from .rules import NOT_PALINDROME_MESSAGE, PALINDROME_MESSAGE


class View(Protocol):
    def show_busy(self) -> None: ...

    def hide_busy(self) -> None: ...

    def show_result(self, message: str) -> None: ...

    def show_error(self, error: InvalidInput) -> None: ...


def result_message(is_palindrome: bool) -> str:
    return PALINDROME_MESSAGE if is_palindrome else NOT_PALINDROME_MESSAGE


@contextmanager
def busy(view: View) -> Iterator[None]:
    view.show_busy()
    try:
        yield
    finally:
        view.hide_busy()


class BusyCounter:
    """Busy indicator shared by concurrent checks; busy while count > 0."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._count = 0

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    def show_busy(self) -> None:
        with self._lock:
            self._count += 1

    def hide_busy(self) -> None:
        with self._lock:
            self._count -= 1


@dataclass
class CheckOutcome:
    is_palindrome: Optional[bool] = None
    message: Optional[str] = None
    error: Optional[InvalidInput] = None


class CheckPresenter:
    def __init__(self, view: View, checker: Optional[PalindromeChecker] = None):
        self.view = view
        self.checker = checker or PalindromeChecker()

    async def on_check(self, text: Optional[str]) -> CheckOutcome:
        """
        Handle one check action.

        On invalid input the view gets the error and no result; whatever
        result it showed before stays as it was.
        """
        try:
            self.checker.validate(text)
        except InvalidInput as exc:
            self.view.show_error(exc)
            return CheckOutcome(error=exc)

        with busy(self.view):
            result = await self.checker.is_palindrome_async(text)

        message = result_message(result)
        self.view.show_result(message)
        return CheckOutcome(is_palindrome=result, message=message)
