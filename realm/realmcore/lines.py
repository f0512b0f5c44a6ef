"""
Line classifier for bitcoin.conf style files.

Each raw line maps to exactly one ConfigLine. Classification is a pure
function of the text: leading spaces and tabs are ignored, prefixes are
matched case-sensitively in a fixed priority order, and assignment
values run up to the first space, tab or newline.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import (MAIN_SECTION, TEST_SECTION, COMMENT_PREFIX,
                        RPCUSER_PREFIX, RPCPASSWORD_PREFIX, RPCCONNECT_PREFIX,
                        VALUE_TERMINATORS, LEADING_WHITESPACE, CONFIG_ENCODING)
from .errors import MalformedLineError


class LineKind(Enum):
    RPC_CONNECT = "rpcconnect"
    RPC_USER = "rpcuser"
    RPC_PASSWORD = "rpcpassword"
    MAIN_SECTION = "main"
    TEST_SECTION = "test"
    COMMENT = "comment"
    OTHER = "other"

    @property
    def is_assignment(self) -> bool:
        return self in ASSIGNMENT_KINDS


ASSIGNMENT_KINDS = frozenset({LineKind.RPC_CONNECT, LineKind.RPC_USER, LineKind.RPC_PASSWORD})


@dataclass(frozen=True)
class ConfigLine:
    """One classified line.

    For assignments `text` is the extracted value, for comments it is the
    remainder after '#', for OTHER it is the stripped line. Section
    markers carry an empty text.
    """
    kind: LineKind
    text: str = ""

    @property
    def value(self) -> Optional[str]:
        return self.text if self.kind.is_assignment else None


# Priority order matters: first match wins.
_SECTIONS = ((MAIN_SECTION, LineKind.MAIN_SECTION),
             (TEST_SECTION, LineKind.TEST_SECTION))
_ASSIGNMENTS = ((RPCUSER_PREFIX, LineKind.RPC_USER),
                (RPCPASSWORD_PREFIX, LineKind.RPC_PASSWORD),
                (RPCCONNECT_PREFIX, LineKind.RPC_CONNECT))

# Near misses of the rpc keys, e.g. 'rpc_connect=', 'RPCUSER=' or 'rpcuser ='
_ASSIGNMENT_LIKE = re.compile(r"^([A-Za-z_][A-Za-z0-9_-]*)\s*=")
_RPC_KEYS = frozenset(prefix.rstrip("=") for prefix, _ in _ASSIGNMENTS)


def _near_miss(text: str) -> Optional[str]:
    m = _ASSIGNMENT_LIKE.match(text)
    if not m:
        return None
    name = m.group(1)
    if name.lower().replace("_", "").replace("-", "") in _RPC_KEYS:
        return name
    return None


def take_value(rest: str) -> str:
    """Return `rest` up to (excluding) the first space, tab or newline."""
    for i, c in enumerate(rest):
        if c in VALUE_TERMINATORS:
            return rest[:i]
    return rest


def _as_text(line, lineno: Optional[int]) -> str:
    if isinstance(line, str):
        return line
    if isinstance(line, (bytes, bytearray)):
        try:
            return bytes(line).decode(CONFIG_ENCODING)
        except UnicodeDecodeError as e:
            raise MalformedLineError(f"cannot decode line as {CONFIG_ENCODING}: {e.reason}",
                                     line=repr(bytes(line)), lineno=lineno) from e
    raise MalformedLineError(f"expected a text line, got {type(line).__name__}",
                             line=repr(line), lineno=lineno)


def classify(line, lineno: Optional[int] = None, strict: bool = False) -> ConfigLine:
    """Classify one line of a config file.

    :param line: the raw line, str or bytes, with or without its newline.
    :param lineno: 1-based line number, only used in error reports.
    :param strict: report empty rpc values and near misses of the rpc keys ('rpc_user=') as malformed.
    :raises MalformedLineError: the line cannot be read as text, or (strict) has an empty value
        or looks like a mistyped rpc key.
    """
    text = _as_text(line, lineno).lstrip(LEADING_WHITESPACE)

    for prefix, kind in _SECTIONS:
        if text.startswith(prefix):
            return ConfigLine(kind)

    if text.startswith(COMMENT_PREFIX):
        return ConfigLine(LineKind.COMMENT, text[len(COMMENT_PREFIX):].rstrip("\n"))

    for prefix, kind in _ASSIGNMENTS:
        if text.startswith(prefix):
            value = take_value(text[len(prefix):])
            if strict and not value:
                raise MalformedLineError(f"empty value for {kind.value!r}", line=text.rstrip("\n"), lineno=lineno)
            return ConfigLine(kind, value)

    other = text.rstrip("\n")
    if strict and (name := _near_miss(other)):
        raise MalformedLineError(f"unrecognized directive {name!r}; did you mean one of {sorted(_RPC_KEYS)}?",
                                 line=other, lineno=lineno)
    return ConfigLine(LineKind.OTHER, other)
