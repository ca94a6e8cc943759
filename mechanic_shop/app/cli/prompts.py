"""
Field prompts for the interactive console.

Every value the operator types goes through a ``FieldPrompt``: a small
state machine that starts out ``AWAITING`` input, stays there while
submissions are rejected (recording the reason) and moves to
``ACCEPTED`` once a submission parses and passes its checks.  The
prompt itself never touches a terminal, so the same rules can be fed
from tests or any other line source.  ``Console.ask`` is the loop that
drives a prompt from real input and writes the reasons back.

Parsing uses the constrained types from ``schemas.fields`` through a
pydantic ``TypeAdapter``; extra checks (existence lookups, duplicate
keys) are plain callables that raise a ``ValidationError`` or a
``ReferenceNotFoundError`` to reject the value.  Any other error, a
``StoreError`` in particular, propagates and ends the operation.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Any, Callable, Iterable, Optional, TextIO

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from mechanic_shop.app.core.exceptions import ReferenceNotFoundError, ShopError, ValidationError


Check = Callable[[Any], None]


_MESSAGES = {
    "string_too_short": "{label} must be at least {min_length} character(s) long",
    "string_too_long": "{label} must be at most {max_length} characters long",
    "int_parsing": "{label} must be a whole number",
    "int_from_float": "{label} must be a whole number",
    "int_type": "{label} must be a whole number",
    "greater_than_equal": "{label} must be greater than or equal to {ge}",
    "greater_than": "{label} must be greater than {gt}",
    "less_than_equal": "{label} must be less than or equal to {le}",
    "string_pattern_mismatch": "{label} must be a date in the format YYYY-MM-DD",
    "value_error": "{label}: {error}",
}


def describe_error(label: str, exc: PydanticValidationError) -> str:
    """Turn the first pydantic error into a sentence about ``label``."""
    error = exc.errors()[0]
    template = _MESSAGES.get(error["type"])
    if template is None:
        return f"{label}: {error['msg']}"
    return template.format(label=label, **error.get("ctx", {}))


class PromptState(Enum):
    AWAITING = "awaiting"
    ACCEPTED = "accepted"


class FieldPrompt:
    """Validation state for a single field.

    Parameters
    ----------
    label : str
        Field name used in rejection reasons.
    field_type : Any
        Type (usually an ``Annotated`` type from ``schemas.fields``) the
        raw text is validated against.
    question : Optional[str]
        Text shown when asking for the value.  Defaults to
        ``"Enter <label>: "``.
    checks : Iterable[Callable]
        Called with the parsed value in order; a ``ValidationError`` or
        ``ReferenceNotFoundError`` they raise rejects the submission.
    optional : bool
        Accept an empty line as ``None`` without running the checks.
    strip : bool
        Strip surrounding whitespace before parsing.  Used for numbers;
        text fields are kept exactly as typed.
    """

    def __init__(
        self,
        label: str,
        field_type: Any,
        question: Optional[str] = None,
        checks: Iterable[Check] = (),
        optional: bool = False,
        strip: bool = False,
    ) -> None:
        self.label = label
        self.question = question or f"Enter {label.lower()}: "
        self.optional = optional
        self.strip = strip
        self._adapter = TypeAdapter(field_type)
        self._checks = tuple(checks)
        self.state = PromptState.AWAITING
        self.value: Any = None
        self.error: Optional[ShopError] = None
        self.rejections = 0

    @property
    def accepted(self) -> bool:
        return self.state is PromptState.ACCEPTED

    def parse(self, raw: str) -> Any:
        """Validate ``raw`` and return the typed value or raise ``ShopError``."""
        text = raw.strip() if self.strip else raw
        if self.optional and not text.strip():
            return None
        try:
            value = self._adapter.validate_python(text)
        except PydanticValidationError as exc:
            raise ValidationError(self.label, describe_error(self.label, exc)) from exc
        for check in self._checks:
            check(value)
        return value

    def submit(self, raw: str) -> PromptState:
        """Feed one line of input; returns the resulting state."""
        if self.accepted:
            return self.state
        try:
            value = self.parse(raw)
        except (ValidationError, ReferenceNotFoundError) as exc:
            self.error = exc
            self.rejections += 1
            return self.state
        self.value = value
        self.error = None
        self.state = PromptState.ACCEPTED
        return self.state


class Console:
    """Line-oriented terminal used by the shop menu.

    Reads from ``stdin`` and writes to ``stdout`` (the process streams by
    default).  End of input raises ``EOFError`` so the caller can end
    the session.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def read_line(self) -> str:
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def write(self, text: str = "", end: str = "\n") -> None:
        self.stdout.write(text + end)
        self.stdout.flush()

    def ask(self, prompt: FieldPrompt) -> Any:
        """Ask until ``prompt`` accepts a value, then return it.

        There is no retry limit: a rejected value prints its reason and
        the question is asked again.
        """
        while not prompt.accepted:
            self.write(prompt.question, end="")
            prompt.submit(self.read_line())
            if prompt.error is not None:
                self.write(str(prompt.error))
        return prompt.value
