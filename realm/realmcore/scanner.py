"""
Scan driver: feeds config lines through the classifier, the section
tracker and the credential record, stopping as soon as the record is
complete.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .creds import ConnectionCred
from .errors import MalformedLineError
from .lines import ConfigLine, classify
from .section import SectionTracker
from .utils import get_logger

logger = get_logger("scanner")


class MergePolicy(Enum):
    """Whether assignments under [test] may change the record."""
    GATED = "gated"             # only the default section and [main] count
    UNGATED = "ungated"         # legacy: every assignment counts, last one wins


class MalformedPolicy(Enum):
    SKIP = "skip"
    ABORT = "abort"


@dataclass
class ScanResult:
    cred: ConnectionCred
    done: bool
    lines_read: int = 0
    skipped: list[MalformedLineError] = field(default_factory=list)

    def missing(self) -> list[str]:
        return self.cred.missing()


class CredentialScanner:
    """Single forward pass over the lines of one config file.

    A scanner owns its section tracker and credential record, so it must
    not be reused for a second file.
    """
    def __init__(self, policy: MergePolicy = MergePolicy.GATED,
                 on_malformed: MalformedPolicy = MalformedPolicy.SKIP,
                 strict: bool = False):
        self.policy = MergePolicy(policy)
        self.on_malformed = MalformedPolicy(on_malformed)
        self.strict = strict
        self.section = SectionTracker()
        self.cred = ConnectionCred()
        self.lines_read = 0
        self.skipped: list[MalformedLineError] = []

    def may_merge(self) -> bool:
        return self.policy is MergePolicy.UNGATED or self.section.active

    def apply(self, cl: ConfigLine) -> bool:
        """Apply an already classified line. Returns True once the record is complete."""
        self.section.update(cl)
        if self.may_merge():
            if self.cred.merge(cl):
                logger.debug("line %d: %s set in %s section", self.lines_read, cl.kind.value,
                             self.section.state.value)
        elif cl.kind.is_assignment:
            logger.debug("line %d: %s ignored in %s section", self.lines_read, cl.kind.value,
                         self.section.state.value)
        return self.cred.is_complete()

    def step(self, line) -> bool:
        """Process the next raw line. Returns True when scanning can stop."""
        self.lines_read += 1
        try:
            cl = classify(line, lineno=self.lines_read, strict=self.strict)
        except MalformedLineError as e:
            if self.on_malformed is MalformedPolicy.ABORT:
                raise
            logger.warning("skipping %s", e)
            self.skipped.append(e)
            return self.cred.is_complete()
        return self.apply(cl)

    def result(self) -> ScanResult:
        return ScanResult(cred=self.cred, done=self.cred.is_complete(),
                          lines_read=self.lines_read, skipped=list(self.skipped))

    def scan(self, lines: Iterable) -> ScanResult:
        """Consume `lines` until the record is complete or the lines run out."""
        for line in lines:
            if self.step(line):
                break
        res = self.result()
        if res.done:
            logger.debug("credentials complete after %d lines", res.lines_read)
        else:
            logger.debug("lines exhausted after %d lines; missing %s", res.lines_read, res.missing())
        return res


def scan_lines(lines: Iterable, policy: MergePolicy = MergePolicy.GATED,
               on_malformed: MalformedPolicy = MalformedPolicy.SKIP,
               strict: bool = False) -> ScanResult:
    """Scan `lines` with a fresh scanner."""
    return CredentialScanner(policy=policy, on_malformed=on_malformed, strict=strict).scan(lines)
