"""
Error types raised while locating, scanning, and using a bitcoin.conf file.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


class RealmError(Exception):
    """Base class for every error raised by realm."""


@dataclass
class ConfigFileNotFound(RealmError):
    """No candidate config file could be opened or read."""
    paths: list[Path] = field(default_factory=list)
    reason: Optional[str] = None

    def __str__(self):
        tried = ", ".join(str(p) for p in self.paths) or "<no candidates>"
        msg = f"Could not read a config file (tried: {tried})"
        if self.reason:
            msg += f": {self.reason}"
        return msg


@dataclass
class MalformedLineError(RealmError):
    message: str
    line: Optional[str] = None
    lineno: Optional[int] = None

    def __str__(self):
        if self.lineno is not None:
            return f"line {self.lineno}: {self.message}"
        return self.message


@dataclass
class IncompleteCredentials(RealmError):
    """A scan ended without all three rpc fields."""
    missing: list[str] = field(default_factory=list)

    def __str__(self):
        return "Could not read credentials; missing " + ", ".join(self.missing)


@dataclass
class RpcError(RealmError):
    message: str
    code: Optional[int] = None

    def __str__(self):
        if self.code is not None:
            return f"RPC error {self.code}: {self.message}"
        return self.message
