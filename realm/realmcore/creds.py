from dataclasses import dataclass, fields
from typing import Optional

from .lines import ConfigLine, LineKind
from .utils import mask

_FIELD_FOR_KIND = {LineKind.RPC_CONNECT: "rpcconnect",
                   LineKind.RPC_USER: "rpcuser",
                   LineKind.RPC_PASSWORD: "rpcpassword"}


@dataclass
class ConnectionCred:
    """The (possibly partial) credentials found so far.

    A field, once set, may be overwritten by a later assignment of the
    same key but is never cleared.
    """
    rpcconnect: Optional[str] = None
    rpcuser: Optional[str] = None
    rpcpassword: Optional[str] = None

    def merge(self, line: ConfigLine) -> bool:
        """Apply an assignment line. Returns True if a field was written; other kinds are ignored."""
        name = _FIELD_FOR_KIND.get(line.kind)
        if name is None:
            return False
        setattr(self, name, line.text)
        return True

    def missing(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name) is None]

    def is_complete(self) -> bool:
        return not self.missing()

    def __repr__(self):
        return (f"ConnectionCred(rpcconnect={self.rpcconnect!r}, rpcuser={self.rpcuser!r}, "
                f"rpcpassword={mask(self.rpcpassword)})")
