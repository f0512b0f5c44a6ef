from enum import Enum

from .lines import ConfigLine, LineKind


class SectionState(Enum):
    DEFAULT = "default"         # no header seen yet; behaves like [main]
    MAIN = "main"
    TEST = "test"

    @property
    def active(self) -> bool:
        return self is not SectionState.TEST


_TRANSITIONS = {LineKind.MAIN_SECTION: SectionState.MAIN,
                LineKind.TEST_SECTION: SectionState.TEST}


class SectionTracker:
    """Tracks which section the scan is in. One tracker per scan."""
    def __init__(self, state: SectionState = SectionState.DEFAULT):
        self.state = state

    @property
    def active(self) -> bool:
        return self.state.active

    def update(self, line: ConfigLine) -> SectionState:
        self.state = _TRANSITIONS.get(line.kind, self.state)
        return self.state

    def __repr__(self):
        return f"SectionTracker({self.state.name})"
