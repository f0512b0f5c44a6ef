"""
Minimal JSON-RPC client for a bitcoind node, authenticated with the
credentials found in bitcoin.conf.
"""
import itertools
from typing import Any, Optional
from urllib.parse import urlsplit

import requests

from .realmcore.constants import (DEFAULT_RPC_PORT, DEFAULT_RPC_SCHEME, DEFAULT_RPC_TIMEOUT_S,
                                  JSONRPC_VERSION, PROGRAM_NAME)
from .realmcore.creds import ConnectionCred
from .realmcore.errors import IncompleteCredentials, RpcError
from .realmcore.utils import get_logger

logger = get_logger("rpc")


def endpoint_url(rpcconnect: str, default_port: int = DEFAULT_RPC_PORT) -> str:
    """Turn an rpcconnect value (host, host:port, or a full http(s) URL) into a URL."""
    if "://" not in rpcconnect:
        rpcconnect = f"{DEFAULT_RPC_SCHEME}://{rpcconnect}"
    parts = urlsplit(rpcconnect)
    if not parts.hostname:
        raise RpcError(f"invalid rpcconnect value {rpcconnect!r}")
    try:
        port = parts.port or default_port
    except ValueError as e:
        raise RpcError(f"invalid port in rpcconnect value {rpcconnect!r}") from e
    host = parts.hostname
    if ":" in host:             # IPv6 literal
        host = f"[{host}]"
    return f"{parts.scheme}://{host}:{port}{parts.path or '/'}"


class RpcClient:
    """Authenticated connection to one node. Use RpcClient.from_creds()."""
    def __init__(self, url: str, user: str, password: str,
                 timeout: float = DEFAULT_RPC_TIMEOUT_S, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.auth = (user, password)
        self._ids = itertools.count(1)

    @classmethod
    def from_creds(cls, cred: ConnectionCred, **kwargs) -> "RpcClient":
        """Build a client. Incomplete credentials are rejected before any network call."""
        if not cred.is_complete():
            raise IncompleteCredentials(missing=cred.missing())
        return cls(endpoint_url(cred.rpcconnect), cred.rpcuser, cred.rpcpassword, **kwargs)

    def __repr__(self):
        return f"RpcClient({self.url!r})"

    def call(self, method: str, *params) -> Any:
        payload = {"jsonrpc": JSONRPC_VERSION,
                   "id": f"{PROGRAM_NAME}-{next(self._ids)}",
                   "method": method,
                   "params": list(params)}
        logger.debug("POST %s %s %s", self.url, method, payload["params"])
        try:
            r = self.session.post(self.url, json=payload, auth=self.auth, timeout=self.timeout)
        except requests.RequestException as e:
            raise RpcError(f"cannot reach {self.url}: {e}") from e
        try:
            body = r.json()
        except ValueError as e:
            # bitcoind answers bad auth with an empty 401
            raise RpcError(f"{method}: HTTP {r.status_code} {r.reason}", code=r.status_code) from e
        if not isinstance(body, dict):
            raise RpcError(f"{method}: unexpected response {body!r}")
        err = body.get("error")
        if isinstance(err, dict):
            raise RpcError(err.get("message", str(err)), code=err.get("code"))
        if err:
            raise RpcError(str(err))
        if not r.ok:
            raise RpcError(f"{method}: HTTP {r.status_code} {r.reason}", code=r.status_code)
        return body.get("result")

    def get_block_count(self) -> int:
        return self.call("getblockcount")

    def get_block_hash(self, height: int) -> str:
        return self.call("getblockhash", height)

    def get_block_stats(self, height: int) -> dict:
        return self.call("getblockstats", height)

    def get_block_outs(self, height: int) -> int:
        """Number of outputs created in the block at `height`."""
        return self.get_block_stats(height)["outs"]
