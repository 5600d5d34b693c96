"""
Saved team-builder form.

The form (team size, name slots and both constraint lists) is stored as a
small key-value table so it survives restarts. Reads fall back to defaults
for any missing or unreadable key; writes always store all four keys.
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

from sqlmodel import Session, select

from app import models
from app.schemas import ConstraintIn, FormState
from team_shuffle.validation import resize_slots

logger = logging.getLogger(__name__)

TEAM_SIZE_KEY = "team-size"
PLAYERS_KEY = "players"
SAME_TEAM_KEY = "same-team"
DIFF_TEAM_KEY = "diff-team"


def _read(session: Session, key: str, default: Any) -> Any:
    entry = session.exec(select(models.FormStateEntry).where(models.FormStateEntry.key == key)).first()
    if entry is None:
        return default
    try:
        return json.loads(entry.value)
    except json.JSONDecodeError:
        logger.warning("Ignoring unreadable form state for key %s", key)
        return default


def _write(session: Session, key: str, value: Any) -> None:
    payload = json.dumps(value, ensure_ascii=False)
    entry = session.exec(select(models.FormStateEntry).where(models.FormStateEntry.key == key)).first()
    if entry is None:
        entry = models.FormStateEntry(key=key, value=payload)
    else:
        entry.value = payload
        entry.updated_at = datetime.now(UTC)
    session.add(entry)


def load_form_state(session: Session) -> FormState:
    defaults = FormState()
    team_size = _read(session, TEAM_SIZE_KEY, defaults.team_size)
    if not isinstance(team_size, int) or team_size < 1:
        team_size = defaults.team_size
    players = _read(session, PLAYERS_KEY, None)
    if not isinstance(players, list):
        players = []
    return FormState(
        team_size=team_size,
        players=resize_slots([str(p) for p in players], team_size),
        same_team=[ConstraintIn(**c) for c in _read(session, SAME_TEAM_KEY, []) if isinstance(c, dict)],
        diff_team=[ConstraintIn(**c) for c in _read(session, DIFF_TEAM_KEY, []) if isinstance(c, dict)],
    )


def save_form_state(session: Session, state: FormState) -> FormState:
    """Persist every key; name slots are resized to match the team size first."""
    normalized = state.model_copy(update={"players": resize_slots(state.players, state.team_size)})
    _write(session, TEAM_SIZE_KEY, normalized.team_size)
    _write(session, PLAYERS_KEY, normalized.players)
    _write(session, SAME_TEAM_KEY, [c.model_dump() for c in normalized.same_team])
    _write(session, DIFF_TEAM_KEY, [c.model_dump() for c in normalized.diff_team])
    session.commit()
    return normalized


def clear_form_state(session: Session) -> FormState:
    """Blank every name slot and drop all constraints; the team size is kept."""
    current = load_form_state(session)
    return save_form_state(session, FormState(team_size=current.team_size, players=[]))
