"""
Append-only usage log for generated teams.

Each successful generation can be recorded as a human-readable block:

    --------------------------------------------------
    Time: 2024-05-01T12:00:00.000Z
    IP: 127.0.0.1
    Input Players: ["A","B","C","D"]
    Result:
      Blue Team: ["A","C"]
      Red Team: ["B","D"]
    --------------------------------------------------

Recording is best effort; callers that must not fail use `record_safely`.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Optional, Sequence

from team_shuffle.errors import UsageLogError

logger = logging.getLogger(__name__)

DELIMITER = "-" * 50


def _iso_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    moment = moment.astimezone(UTC)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _dump(names: Sequence[str]) -> str:
    return json.dumps(list(names), ensure_ascii=False, separators=(",", ":"))


def format_entry(
    players: Sequence[str],
    team_blue: Sequence[str],
    team_red: Sequence[str],
    client_ip: Optional[str],
    timestamp: Optional[datetime] = None,
) -> str:
    moment = timestamp or datetime.now(UTC)
    return (
        "\n"
        f"{DELIMITER}\n"
        f"Time: {_iso_timestamp(moment)}\n"
        f"IP: {client_ip or 'unknown'}\n"
        f"Input Players: {_dump(players)}\n"
        "Result:\n"
        f"  Blue Team: {_dump(team_blue)}\n"
        f"  Red Team: {_dump(team_red)}\n"
        f"{DELIMITER}\n"
    )


class UsageLog:
    """Text file that only ever grows; appends are serialised per instance."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = threading.Lock()

    def append(
        self,
        players: Sequence[str],
        team_blue: Sequence[str],
        team_red: Sequence[str],
        client_ip: Optional[str],
        timestamp: Optional[datetime] = None,
    ) -> str:
        entry = format_entry(players, team_blue, team_red, client_ip, timestamp)
        try:
            with self._lock:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with self.path.open("a", encoding="utf-8") as handle:
                    handle.write(entry)
        except (OSError, ValueError) as exc:
            # ValueError covers names that cannot be encoded, e.g. lone surrogates.
            raise UsageLogError(f"Could not write usage log {self.path}: {exc}") from exc
        return entry

    def record_safely(
        self,
        players: Sequence[str],
        team_blue: Sequence[str],
        team_red: Sequence[str],
        client_ip: Optional[str],
    ) -> bool:
        """Append an entry, logging instead of raising on failure."""
        try:
            self.append(players, team_blue, team_red, client_ip)
        except Exception:
            logger.exception("Failed to log result")
            return False
        return True
