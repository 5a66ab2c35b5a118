"""Tokenizer for the ``name(key=value, ...)`` invocation syntax."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from .errors import MalformedInvocation
from .models import QUIT, Quit

QUIT_WORDS = frozenset({"quit", "exit", "bye"})

ParameterList = List[Tuple[str, str]]


class ScanState(Enum):
    """States of the parameter body scanner."""

    READING_KEY = "reading_key"
    READING_VALUE = "reading_value"
    READING_VALUE_QUOTED = "reading_value_quoted"


@dataclass(frozen=True)
class Invocation:
    """A command name with its raw parameters.

    ``params`` is ``None`` when the invocation had no parentheses at all,
    and an empty list for ``name()``.
    """

    name: str
    params: Optional[ParameterList] = None

    @property
    def has_parameter_block(self) -> bool:
        return self.params is not None


def tokenize(raw: str) -> Union[Invocation, Quit]:
    """Split a raw invocation into its command name and parameter pairs.

    Args:
        raw: One line of operator input, e.g. ``set_log_level(log_level=INFO)``

    Returns:
        The ``QUIT`` sentinel for quit words, otherwise an Invocation

    Raises:
        MalformedInvocation: If an opening parenthesis is never closed
    """
    text = raw.strip()

    if text.lower() in QUIT_WORDS:
        return QUIT

    paren_idx = text.find("(")
    if paren_idx == -1:
        return Invocation(name=text)

    if not text.endswith(")"):
        raise MalformedInvocation(text)

    name = text[:paren_idx].strip()
    body = text[paren_idx + 1:-1]
    return Invocation(name=name, params=parse_params(body))


def parse_params(body: str) -> ParameterList:
    """Parse a parameter body into ordered ``(key, value)`` pairs.

    Commas inside double quotes belong to the value. Quotes are kept
    verbatim. Duplicate keys are preserved in scan order.
    """
    params: ParameterList = []
    key: List[str] = []
    value: List[str] = []
    state = ScanState.READING_KEY

    for ch in body:
        if state is ScanState.READING_KEY:
            if ch == "=":
                state = ScanState.READING_VALUE
            elif not ch.isspace() or key:
                key.append(ch)
        elif state is ScanState.READING_VALUE:
            if ch == ",":
                params.append(_commit(key, value))
                key, value = [], []
                state = ScanState.READING_KEY
            else:
                value.append(ch)
                if ch == '"':
                    state = ScanState.READING_VALUE_QUOTED
        else:
            value.append(ch)
            if ch == '"':
                state = ScanState.READING_VALUE

    if key or value:
        params.append(_commit(key, value))

    return params


def get_param(params: ParameterList, key: str) -> Optional[str]:
    """Return the first value whose key matches ``key`` case-insensitively."""
    wanted = key.lower()
    for name, value in params:
        if name.lower() == wanted:
            return value
    return None


def _commit(key: List[str], value: List[str]) -> Tuple[str, str]:
    return "".join(key).strip(), "".join(value).strip()
