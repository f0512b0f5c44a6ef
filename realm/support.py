import os
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from .realmcore.constants import CONFIG_FILENAME, HOME_CONFIG_DIR, CONFIG_ENV_VAR
from .realmcore.errors import ConfigFileNotFound, IncompleteCredentials
from .realmcore.scanner import CredentialScanner, MergePolicy, MalformedPolicy, ScanResult
from .realmcore.utils import get_logger

logger = get_logger("support")

################################################################

def home():
    """Returns home directory. Do not cache, because that breaks monkeypatching"""
    return Path(os.getenv('HOME',''))

def config_paths():
    """Return the config files to try, in order.
    $REALM_CONFIG if set, otherwise ./bitcoin.conf then $HOME/.bitcoin/bitcoin.conf"""
    try:
        return [Path(os.environ[CONFIG_ENV_VAR])]
    except KeyError:
        return [Path(CONFIG_FILENAME), home() / HOME_CONFIG_DIR / CONFIG_FILENAME]

@contextmanager
def open_config(path: Optional[Path] = None):
    """Open the first candidate config file that can be opened, in binary so that
    each line is decoded (and possibly rejected) on its own.
    Yields (path, file). Raises ConfigFileNotFound only when every candidate fails."""
    candidates = [Path(path)] if path else config_paths()
    reason = None
    for candidate in candidates:
        try:
            f = candidate.open('rb')
        except OSError as e:
            logger.debug("cannot open %s: %s", candidate, e)
            if reason is None or not isinstance(e, FileNotFoundError):
                reason = e.strerror or str(e)
            continue
        logger.debug("using config file %s", candidate)
        with f:
            yield candidate, f
        return
    raise ConfigFileNotFound(paths=candidates, reason=reason)

def config_lines(f):
    """Lazily yield the lines of a binary file, with CRLF endings folded to LF."""
    for line in f:
        if line.endswith(b"\r\n"):
            line = line[:-2] + b"\n"
        yield line

def scan_config(path: Optional[Path] = None,
                policy: MergePolicy = MergePolicy.GATED,
                on_malformed: MalformedPolicy = MalformedPolicy.SKIP,
                strict: bool = False) -> tuple[Path, ScanResult]:
    """Locate the config file and scan it. Returns (path, result) even if incomplete."""
    scanner = CredentialScanner(policy=policy, on_malformed=on_malformed, strict=strict)
    with open_config(path) as (found, f):
        try:
            result = scanner.scan(config_lines(f))
        except OSError as e:
            raise ConfigFileNotFound(paths=[found], reason=e.strerror or str(e)) from e
        return found, result

def load_credentials(path: Optional[Path] = None, **options):
    """Return complete credentials from the config file.
    :raises ConfigFileNotFound: no readable config file.
    :raises IncompleteCredentials: the file does not define all three rpc fields.
    """
    _, result = scan_config(path, **options)
    if not result.done:
        raise IncompleteCredentials(missing=result.missing())
    return result.cred
