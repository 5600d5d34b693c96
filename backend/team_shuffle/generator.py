"""
Constraint-aware team generator.

Splits a roster of 2*k names into two teams of k by rejection sampling:
shuffle the roster, cut it in half and keep the first split that satisfies
every active same-team/different-team constraint. Over-constrained or
contradictory inputs are reported as `NotFound` once the attempt budget is
spent; the generator never tries to prove that no split exists.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Iterable, List, Optional, Sequence, Union

from team_shuffle.validation import normalize_roster

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10000


class ConstraintKind(str, Enum):
    SAME_TEAM = "same"
    DIFFERENT_TEAM = "diff"


@dataclass(frozen=True)
class Constraint:
    p1: str
    p2: str
    kind: ConstraintKind = ConstraintKind.SAME_TEAM
    id: Optional[str] = None

    def is_active(self, roster: AbstractSet[str]) -> bool:
        """
        Inert constraints never reject a split: a blank slot, the same name
        twice, or a name that is not on the roster.
        """
        p1, p2 = self.p1.strip(), self.p2.strip()
        if not p1 or not p2 or p1 == p2:
            return False
        return p1 in roster and p2 in roster

    def satisfied_by(self, team_blue: AbstractSet[str]) -> bool:
        together = (self.p1.strip() in team_blue) == (self.p2.strip() in team_blue)
        if self.kind is ConstraintKind.SAME_TEAM:
            return together
        return not together


@dataclass(frozen=True)
class Partition:
    team_blue: List[str]
    team_red: List[str]
    attempts: int = 1


@dataclass(frozen=True)
class NotFound:
    attempts: int
    message: str = field(
        default="No team split satisfies the constraints. Check whether the constraints conflict."
    )

    def __bool__(self) -> bool:
        return False


GenerateResult = Union[Partition, NotFound]


def _as_rng(rng: Union[random.Random, int, None]) -> random.Random:
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


def _active_constraints(
    constraints: Iterable[Constraint], roster: AbstractSet[str], kind: ConstraintKind
) -> List[Constraint]:
    active = []
    for constraint in constraints:
        if constraint.kind is not kind:
            constraint = Constraint(p1=constraint.p1, p2=constraint.p2, kind=kind, id=constraint.id)
        if constraint.is_active(roster):
            active.append(constraint)
    return active


def generate(
    roster: Sequence[str],
    team_size: int,
    same_team: Iterable[Constraint] = (),
    diff_team: Iterable[Constraint] = (),
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    rng: Union[random.Random, int, None] = None,
) -> GenerateResult:
    """
    Return the first sampled split that honours all active constraints.

    The kind of each constraint is taken from the list it arrives in, so a
    row moved between the same-team and different-team lists does not need
    to be rebuilt. `rng` may be a `random.Random` or a seed; passing either
    makes the result reproducible.
    """
    if max_attempts < 0:
        raise ValueError(f"max_attempts must be non-negative (got {max_attempts})")

    names = tuple(normalize_roster(roster, team_size))
    name_set = frozenset(names)
    checks = tuple(
        _active_constraints(tuple(same_team), name_set, ConstraintKind.SAME_TEAM)
        + _active_constraints(tuple(diff_team), name_set, ConstraintKind.DIFFERENT_TEAM)
    )
    source = _as_rng(rng)

    pool = list(names)
    for attempt in range(1, max_attempts + 1):
        source.shuffle(pool)
        blue = pool[:team_size]
        blue_set = frozenset(blue)
        if all(check.satisfied_by(blue_set) for check in checks):
            logger.debug("Found a valid split after %d attempt(s)", attempt)
            return Partition(team_blue=list(blue), team_red=pool[team_size:], attempts=attempt)

    logger.info(
        "No valid split for %d players with %d active constraint(s) after %d attempts",
        len(names),
        len(checks),
        max_attempts,
    )
    return NotFound(attempts=max_attempts)
