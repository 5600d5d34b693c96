from __future__ import annotations

from typing import Dict, List


class TeamShuffleError(Exception):
    """Base class for errors raised by the team_shuffle package."""


class InvalidRosterError(TeamShuffleError):
    """Roster input cannot be handed to the generator as-is."""

    code = "invalid_roster"


class InvalidTeamSizeError(InvalidRosterError):
    code = "invalid_team_size"


class IncompleteRosterError(InvalidRosterError):
    code = "incomplete_roster"

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Enter all {expected} player names (got {actual}).")


class DuplicateNamesError(InvalidRosterError):
    """Raised with the 1-based slot positions of every repeated name."""

    code = "duplicate_names"

    def __init__(self, duplicates: Dict[str, List[int]]):
        self.duplicates = duplicates
        lines = [
            f"Slots {', '.join(str(i) for i in positions)}: '{name}' is entered more than once."
            for name, positions in duplicates.items()
        ]
        lines.append("Every player needs a different name.")
        super().__init__("\n".join(lines))


class UsageLogError(TeamShuffleError):
    """Writing a result record to the usage log failed."""
