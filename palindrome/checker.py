"""
Core palindrome logic.

Responsibilities:
- input validation (empty / too short)
- normalization (letters and decimal digits only, lowercased)
- two-pointer symmetry scan, sync and async
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from enum import Enum
from typing import Optional

from .config import get_settings
from .rules import EMPTY_MESSAGE, MIN_LENGTH, TOO_SHORT_MESSAGE

logger = logging.getLogger(__name__)


class InvalidReason(str, Enum):
    EMPTY = "empty"
    TOO_SHORT = "tooShort"

    @property
    def message(self) -> str:
        if self is InvalidReason.EMPTY:
            return EMPTY_MESSAGE
        return TOO_SHORT_MESSAGE


class InvalidInput(ValueError):
    """Raised when the input is rejected before checking."""

    def __init__(self, reason: InvalidReason):
        self.reason = reason
        self.message = reason.message
        super().__init__(self.message)


def normalize(text: Optional[str]) -> str:
    """
    Lowercase, then keep only letters and decimal digits.

    Rules:
    - Letters are any Unicode letter category, not just ASCII.
    - Digits are Unicode decimal digits (no superscripts, fractions, numerals).
    - Each character is lowercased on its own, so context rules like the
      Greek final sigma don't apply ("ΣΑΣ" -> "σασ").
    - Lowercasing happens before filtering so that expansions like "İ" -> "i̇"
      don't leave a combining mark behind; a second pass changes nothing.
    """
    if not text:
        return ""
    return "".join(c for ch in text for c in ch.lower() if c.isalpha() or c.isdecimal())


def check_input(text: Optional[str]) -> Optional[InvalidInput]:
    """Return the validation failure for `text`, or None if it is acceptable."""
    if text is None or not text.strip():
        return InvalidInput(InvalidReason.EMPTY)
    if len(text) < MIN_LENGTH:
        return InvalidInput(InvalidReason.TOO_SHORT)
    return None


def validate(text: Optional[str]) -> None:
    error = check_input(text)
    if error is not None:
        logger.info("rejected input: %s", error.reason.value)
        raise error


def is_palindrome(text: Optional[str]) -> bool:
    """
    Check `text` for symmetry after normalization.

    Never raises. Invalid input degrades to the trivial case: an empty
    normalized string is a palindrome.
    """
    cleaned = normalize(text)

    left = 0
    right = len(cleaned) - 1
    while left < right:
        if cleaned[left] != cleaned[right]:
            return False
        left += 1
        right -= 1
    return True


_default_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def _get_default_executor() -> ThreadPoolExecutor:
    global _default_executor
    with _executor_lock:
        if _default_executor is None:
            _default_executor = ThreadPoolExecutor(
                max_workers=get_settings().max_workers,
                thread_name_prefix="palindrome",
            )
        return _default_executor


def shutdown_default_executor() -> None:
    """Wait for running checks, then drop the shared pool; the next async check makes a new one."""
    global _default_executor
    with _executor_lock:
        executor, _default_executor = _default_executor, None
    if executor is not None:
        executor.shutdown(wait=True)


async def is_palindrome_async(text: Optional[str], executor: Optional[Executor] = None) -> bool:
    """Run `is_palindrome` on a worker thread and await the result."""
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(executor or _get_default_executor(), is_palindrome, text)
    logger.debug("checked %d chars -> %s", len(text or ""), result)
    return result


class PalindromeChecker:
    """Object form of the module functions, bound to one executor."""

    def __init__(self, executor: Optional[Executor] = None):
        self._executor = executor

    def validate(self, text: Optional[str]) -> None:
        validate(text)

    def is_palindrome(self, text: Optional[str]) -> bool:
        return is_palindrome(text)

    async def is_palindrome_async(self, text: Optional[str]) -> bool:
        return await is_palindrome_async(text, self._executor)
