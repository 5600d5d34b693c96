import random

import pytest

from team_shuffle.errors import DuplicateNamesError, IncompleteRosterError, InvalidTeamSizeError
from team_shuffle.generator import Constraint, ConstraintKind, NotFound, Partition, generate

ROSTER = ["Alice", "Bob", "Carol", "Dave"]
TEN = [f"Player{i}" for i in range(10)]


def same(p1: str, p2: str) -> Constraint:
    return Constraint(p1=p1, p2=p2, kind=ConstraintKind.SAME_TEAM)


def diff(p1: str, p2: str) -> Constraint:
    return Constraint(p1=p1, p2=p2, kind=ConstraintKind.DIFFERENT_TEAM)


def side(result: Partition, name: str) -> str:
    return "blue" if name in result.team_blue else "red"


@pytest.mark.parametrize("roster", [ROSTER, TEN, ["Solo", "Duo"]])
def test_split_covers_roster_exactly_once(roster):
    team_size = len(roster) // 2
    for seed in range(25):
        result = generate(roster, team_size, rng=seed)
        assert isinstance(result, Partition)
        assert len(result.team_blue) == len(result.team_red) == team_size
        assert set(result.team_blue) | set(result.team_red) == set(roster)
        assert not set(result.team_blue) & set(result.team_red)


def test_same_team_constraint_always_holds():
    for seed in range(50):
        result = generate(ROSTER, 2, same_team=[same("Alice", "Bob")], rng=seed)
        assert result
        assert side(result, "Alice") == side(result, "Bob")


def test_different_team_constraint_always_holds():
    for seed in range(50):
        result = generate(TEN, 5, diff_team=[diff("Player0", "Player1"), diff("Player2", "Player3")], rng=seed)
        assert result
        assert side(result, "Player0") != side(result, "Player1")
        assert side(result, "Player2") != side(result, "Player3")


def test_mixed_constraints_on_larger_roster():
    same_team = [same("Player0", "Player1"), same("Player1", "Player2")]
    diff_team = [diff("Player0", "Player9")]
    for seed in range(20):
        result = generate(TEN, 5, same_team=same_team, diff_team=diff_team, rng=seed)
        assert result
        assert side(result, "Player0") == side(result, "Player1") == side(result, "Player2")
        assert side(result, "Player9") != side(result, "Player0")


@pytest.mark.parametrize("max_attempts", [0, 1, 10, 500])
def test_contradictory_constraints_not_found(max_attempts):
    result = generate(
        ROSTER,
        2,
        same_team=[same("Alice", "Bob")],
        diff_team=[diff("Alice", "Bob")],
        max_attempts=max_attempts,
        rng=3,
    )
    assert isinstance(result, NotFound)
    assert not result
    assert result.attempts == max_attempts


def test_unsatisfiable_group_size_not_found():
    # three players cannot share a team of two
    result = generate(ROSTER, 2, same_team=[same("Alice", "Bob"), same("Bob", "Carol")], max_attempts=200, rng=1)
    assert isinstance(result, NotFound)


def test_seeded_results_are_reproducible():
    first = generate(TEN, 5, same_team=[same("Player3", "Player4")], rng=42)
    second = generate(TEN, 5, same_team=[same("Player3", "Player4")], rng=random.Random(42))
    assert first == second


def test_generator_does_not_mutate_input():
    roster = list(ROSTER)
    generate(roster, 2, rng=5)
    assert roster == ROSTER


@pytest.mark.parametrize(
    "constraint",
    [
        Constraint(p1="", p2="Bob"),
        Constraint(p1="Alice", p2="  "),
        Constraint(p1="Alice", p2="Alice"),
        Constraint(p1="Alice", p2="Zed"),
    ],
)
def test_inert_constraints_never_reject(constraint):
    # paired with its opposite, an active constraint would make every split fail
    result = generate(ROSTER, 2, same_team=[constraint], diff_team=[constraint], max_attempts=20, rng=0)
    assert isinstance(result, Partition)


def test_constraint_kind_follows_list():
    mislabelled = Constraint(p1="Alice", p2="Bob", kind=ConstraintKind.SAME_TEAM)
    for seed in range(20):
        result = generate(ROSTER, 2, diff_team=[mislabelled], rng=seed)
        assert side(result, "Alice") != side(result, "Bob")


def test_constraint_names_are_trimmed():
    for seed in range(20):
        result = generate(ROSTER, 2, same_team=[same(" Alice", "Bob ")], rng=seed)
        assert side(result, "Alice") == side(result, "Bob")


def test_invalid_rosters_raise():
    with pytest.raises(DuplicateNamesError):
        generate(["Alice", "Alice", "Bob", "Carol"], 2)
    with pytest.raises(IncompleteRosterError):
        generate(["Alice", "Bob", "Carol"], 2)
    with pytest.raises(InvalidTeamSizeError):
        generate([], 0)


def test_negative_attempt_budget_rejected():
    with pytest.raises(ValueError):
        generate(ROSTER, 2, max_attempts=-1)


def test_accepts_one_shot_iterables_for_constraints():
    for seed in range(10):
        result = generate(
            tuple(ROSTER),
            2,
            same_team=(c for c in [same("Alice", "Bob")]),
            diff_team=iter([diff("Alice", "Carol")]),
            rng=seed,
        )
        assert side(result, "Alice") == side(result, "Bob")
        assert side(result, "Alice") != side(result, "Carol")
