"""Unit roster: the authoritative store of living units per team."""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .constants import ATTACK_DAMAGE, MAX_HIT_POINTS
from .models import CellPosition, Team, Unit, opponent

logger = logging.getLogger(__name__)


class Roster:
    """
    Living units of both teams, looked up by team and cell.

    A team holds at most one unit per cell in practice, but add() does not
    enforce it; the placement flow owns that policy. Units of opposing teams
    may share a cell. Dead units are removed, never kept at 0 hp.
    """

    def __init__(self, max_hit_points: int = MAX_HIT_POINTS):
        self.max_hit_points = max_hit_points
        self._units: Dict[Team, List[Unit]] = {team: [] for team in Team}

    @classmethod
    def from_positions(cls, placements: Dict[Team, Iterable[CellPosition]],
                       max_hit_points: int = MAX_HIT_POINTS) -> 'Roster':
        """Build a roster with one full-health unit per listed position."""
        roster = cls(max_hit_points)
        for team, positions in placements.items():
            for pos in positions:
                roster.add(team, pos)
        return roster

    # =========================================================================
    # Mutation
    # =========================================================================

    def add(self, team: Team, pos: CellPosition) -> Unit:
        """Insert a new full-health unit for team at pos."""
        unit = Unit(team, pos, self.max_hit_points)
        self._units[team].append(unit)
        return unit

    def remove_at(self, team: Team, pos: CellPosition) -> Optional[Unit]:
        """Remove team's unit at pos. Returns it, or None if there was none."""
        unit = self.unit_at(team, pos)
        if unit is None:
            return None
        self._units[team].remove(unit)
        return unit

    def apply_damage(self, team: Team, pos: CellPosition,
                     amount: int = ATTACK_DAMAGE) -> Optional[bool]:
        """
        Damage team's unit at pos, removing it if its hit points run out.

        Returns True if the unit died, False if it survived,
        and None if no unit of team stands at pos.
        """
        unit = self.unit_at(team, pos)
        if unit is None:
            return None

        unit.hit_points -= amount
        if unit.hit_points <= 0:
            self._units[team].remove(unit)
            logger.info(f"Team {team.value} unit at {pos} destroyed")
            return True
        return False

    def move(self, team: Team, source: CellPosition, destination: CellPosition) -> bool:
        """Move team's unit from source to destination. False if source is empty."""
        unit = self.unit_at(team, source)
        if unit is None:
            return False
        unit.position = destination
        return True

    # =========================================================================
    # Queries
    # =========================================================================

    def unit_at(self, team: Team, pos: CellPosition) -> Optional[Unit]:
        """Get team's unit at pos, or None."""
        for unit in self._units[team]:
            if unit.position == pos:
                return unit
        return None

    def exists_at(self, team: Team, pos: CellPosition) -> bool:
        return self.unit_at(team, pos) is not None

    def units(self, team: Team) -> List[Unit]:
        """Live list of team's units. Callers must not mutate it."""
        return self._units[team]

    def positions(self, team: Team) -> Set[CellPosition]:
        """Cells occupied by team."""
        return {unit.position for unit in self._units[team]}

    def count_alive(self, team: Team) -> int:
        return len(self._units[team])

    def is_winner(self, team: Team) -> bool:
        """A team wins when it has units left and the opponent has none."""
        return self.count_alive(team) > 0 and self.count_alive(opponent(team)) == 0

    def snapshot(self, team: Team) -> Tuple[Unit, ...]:
        """Detached copies of team's units, safe to hand to the UI."""
        return tuple(replace(unit) for unit in self._units[team])

    def __repr__(self) -> str:
        return f"Roster(A={self.count_alive(Team.A)}, B={self.count_alive(Team.B)})"
