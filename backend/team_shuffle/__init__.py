"""
Team shuffle library.

Validates a roster, splits it into two constraint-respecting teams and
records generated results. The FastAPI layer in `app` and the CLI in
`team_shuffle.cli` are thin wrappers around these functions.
"""

from .errors import (  # noqa: F401
    DuplicateNamesError,
    IncompleteRosterError,
    InvalidRosterError,
    InvalidTeamSizeError,
    TeamShuffleError,
    UsageLogError,
)
from .generator import (  # noqa: F401
    DEFAULT_MAX_ATTEMPTS,
    Constraint,
    ConstraintKind,
    NotFound,
    Partition,
    generate,
)
from .validation import normalize_roster, resize_slots  # noqa: F401
