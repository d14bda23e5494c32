"""
Placement phase: each team picks the cells of its units before the battle.

The roster's add() is permissive; the "exactly N units per team" rule is
enforced here, at the placement boundary.
"""

import logging
from enum import Enum, auto
from typing import Dict, Iterable, List, Mapping, Optional

from .config import Settings, get_settings
from .constants import BOARD_SIZE, UNITS_PER_TEAM
from .geometry import is_in_bounds
from .models import CellPosition, Team

logger = logging.getLogger(__name__)


class PlacementResult(Enum):
    """Outcome of toggling a cell during placement."""
    PLACED = auto()
    REMOVED = auto()
    REJECTED_FULL = auto()
    REJECTED_OUT_OF_BOUNDS = auto()


class InvalidPlacementError(ValueError):
    """Raised when a battle is started from an incomplete or invalid placement."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__("; ".join(problems))


class PlacementBoard:
    """
    Per-team cell selection before the battle.

    Usage:
        board = PlacementBoard()
        board.toggle(Team.A, CellPosition(0, 0))
        ...
        if board.is_ready():
            controller = BattleController.from_placements(board.placements())
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings if settings is not None else get_settings()
        self.size = settings.board_size
        self.units_per_team = settings.units_per_team
        # Insertion order is kept so the UI can number units
        self._cells: Dict[Team, List[CellPosition]] = {team: [] for team in Team}

    def toggle(self, team: Team, pos: CellPosition) -> PlacementResult:
        """Place a unit on an empty cell, or pick it back up if already placed."""
        if not is_in_bounds(pos, self.size):
            return PlacementResult.REJECTED_OUT_OF_BOUNDS

        cells = self._cells[team]
        if pos in cells:
            cells.remove(pos)
            return PlacementResult.REMOVED

        if len(cells) >= self.units_per_team:
            logger.debug(f"Team {team.value} already has {len(cells)} units; {pos} rejected")
            return PlacementResult.REJECTED_FULL

        cells.append(pos)
        return PlacementResult.PLACED

    def clear(self, team: Team) -> None:
        """Remove every placed unit of team."""
        self._cells[team].clear()

    def positions(self, team: Team) -> List[CellPosition]:
        return list(self._cells[team])

    def remaining(self, team: Team) -> int:
        """How many more units team still has to place."""
        return self.units_per_team - len(self._cells[team])

    def is_complete(self, team: Team) -> bool:
        return len(self._cells[team]) == self.units_per_team

    def is_ready(self) -> bool:
        """Both teams have placed exactly units_per_team units."""
        return all(self.is_complete(team) for team in Team)

    def placements(self) -> Dict[Team, List[CellPosition]]:
        """Per-team position lists, in the shape BattleController expects."""
        return {team: self.positions(team) for team in Team}


def validate_placements(placements: Mapping[Team, Iterable[CellPosition]],
                        size: int = BOARD_SIZE,
                        units_per_team: int = UNITS_PER_TEAM) -> List[str]:
    """
    Check a placement before the battle starts.

    Returns a list of problems; an empty list means the placement is valid.
    """
    problems = []
    for team in Team:
        positions = list(placements.get(team, ()))
        if len(positions) != units_per_team:
            problems.append(
                f"Team {team.value} must place exactly {units_per_team} units "
                f"(got {len(positions)})"
            )
        out_of_bounds = [pos for pos in positions if not is_in_bounds(pos, size)]
        if out_of_bounds:
            problems.append(f"Team {team.value} has units off the board: {out_of_bounds}")
        if len(set(positions)) != len(positions):
            problems.append(f"Team {team.value} has more than one unit on a cell")

    if problems:
        logger.warning(f"Invalid placement: {'; '.join(problems)}")
    return problems
