"""
Input checks run before a roster reaches the generator.

Raw form input is a list of name slots, some of which may still be blank.
`normalize_roster` turns it into the trimmed roster the generator expects or
raises an `InvalidRosterError` subclass that says what to fix.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from team_shuffle.errors import DuplicateNamesError, IncompleteRosterError, InvalidTeamSizeError


def check_team_size(team_size: int) -> None:
    if team_size < 1:
        raise InvalidTeamSizeError(f"Team size must be at least 1 (got {team_size}).")


def duplicate_positions(raw_names: Sequence[str]) -> Dict[str, List[int]]:
    """Map each repeated name to the 1-based slots it occupies; blanks are ignored."""
    positions: Dict[str, List[int]] = {}
    for index, raw in enumerate(raw_names, start=1):
        name = raw.strip()
        if not name:
            continue
        positions.setdefault(name, []).append(index)
    return {name: slots for name, slots in positions.items() if len(slots) > 1}


def normalize_roster(raw_names: Sequence[str], team_size: int) -> List[str]:
    """
    Trim names, drop blank slots and verify the roster is complete and unique.

    Positions reported for duplicates count every raw slot, blanks included,
    so they match what the user sees in the form.
    """
    check_team_size(team_size)
    names = [raw.strip() for raw in raw_names if raw.strip()]

    expected = team_size * 2
    if len(names) != expected:
        raise IncompleteRosterError(expected=expected, actual=len(names))

    duplicates = duplicate_positions(raw_names)
    if duplicates:
        raise DuplicateNamesError(duplicates)
    return names


def resize_slots(players: Sequence[str], team_size: int) -> List[str]:
    """Pad with blank slots or truncate so there are exactly two teams' worth of slots."""
    check_team_size(team_size)
    total = team_size * 2
    slots = list(players[:total])
    if len(slots) < total:
        slots.extend([""] * (total - len(slots)))
    return slots
