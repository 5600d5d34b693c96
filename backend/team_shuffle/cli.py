import json
import logging
from pathlib import Path
from typing import List, Optional

import typer

from .errors import InvalidRosterError
from .generator import DEFAULT_MAX_ATTEMPTS, Constraint, ConstraintKind, generate
from .usage_log import UsageLog

app = typer.Typer(help="Split a roster into two teams with same/different team constraints.")

EXIT_INVALID_INPUT = 1
EXIT_NOT_FOUND = 2


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _parse_pairs(values: List[str], kind: ConstraintKind) -> List[Constraint]:
    pairs = []
    for value in values:
        p1, sep, p2 = value.partition(",")
        if not sep:
            raise typer.BadParameter(f"Expected NAME,NAME but got '{value}'")
        pairs.append(Constraint(p1=p1.strip(), p2=p2.strip(), kind=kind))
    return pairs


@app.command("generate")
def generate_command(
    players: List[str] = typer.Argument(..., help="Player names, two teams' worth"),
    team_size: Optional[int] = typer.Option(None, "--team-size", "-n", help="Players per team (default: half the roster)"),
    same: List[str] = typer.Option([], "--same", help="NAME,NAME pair that must share a team"),
    diff: List[str] = typer.Option([], "--diff", help="NAME,NAME pair that must be split"),
    max_attempts: int = typer.Option(DEFAULT_MAX_ATTEMPTS, help="Shuffles to try before giving up"),
    seed: Optional[int] = typer.Option(None, help="Random seed for reproducible teams"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    log_file: Optional[Path] = typer.Option(None, help="Append the result to this usage log"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Generate teams and print them to stdout."""
    setup_logging(verbose)
    if team_size is None:
        named = [p for p in players if p.strip()]
        if len(named) % 2:
            typer.echo(f"Got {len(named)} player names; an even number is needed for two equal teams.", err=True)
            raise typer.Exit(code=EXIT_INVALID_INPUT)
        team_size = len(named) // 2
    try:
        result = generate(
            players,
            team_size,
            same_team=_parse_pairs(same, ConstraintKind.SAME_TEAM),
            diff_team=_parse_pairs(diff, ConstraintKind.DIFFERENT_TEAM),
            max_attempts=max_attempts,
            rng=seed,
        )
    except InvalidRosterError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_INVALID_INPUT)

    if not result:
        typer.echo(result.message, err=True)
        raise typer.Exit(code=EXIT_NOT_FOUND)

    if log_file is not None:
        UsageLog(log_file).record_safely([p.strip() for p in players if p.strip()], result.team_blue, result.team_red, "cli")

    if as_json:
        output = {"team_blue": result.team_blue, "team_red": result.team_red, "attempts": result.attempts}
        typer.echo(json.dumps(output, ensure_ascii=False, indent=2))
    else:
        typer.echo(f"Blue: {', '.join(result.team_blue)}")
        typer.echo(f"Red:  {', '.join(result.team_red)}")


@app.callback()
def callback():
    """Team shuffle command line."""


def main():
    app()


if __name__ == "__main__":
    main()
