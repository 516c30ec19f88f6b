"""
confirm.py

Responsibility: One-shot interactive confirmation before a destructive action.

A prompt moves IDLE -> PROMPTING -> CONFIRMED | DECLINED and is then closed.
Only the literal answer "yes" (any case) confirms.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import TextIO


class PromptClosedError(RuntimeError):
    pass


class PromptState(str, Enum):
    IDLE = "idle"
    PROMPTING = "prompting"
    CONFIRMED = "confirmed"
    DECLINED = "declined"


def is_affirmative(answer: str) -> bool:
    return answer.lower() == "yes"


class ConfirmationPrompt:
    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self.state = PromptState.IDLE

    def ask(self, question: str) -> bool:
        """
        Write `question`, read a single line and return True only for "yes".

        End of input counts as a decline. The prompt cannot be asked twice.
        """
        if self.state is not PromptState.IDLE:
            raise PromptClosedError("Confirmation prompt has already been answered.")

        self.state = PromptState.PROMPTING
        self._stdout.write(question)
        self._stdout.flush()
        answer = self._stdin.readline().rstrip("\r\n")

        self.state = PromptState.CONFIRMED if is_affirmative(answer) else PromptState.DECLINED
        return self.state is PromptState.CONFIRMED
