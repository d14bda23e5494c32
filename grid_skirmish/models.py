"""Core data structures for the skirmish engine."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class Team(Enum):
    """One of the two opposing sides."""
    A = "A"
    B = "B"

    def opponent(self) -> 'Team':
        """Return the opposing team."""
        return opponent(self)


_OPPONENTS = {
    Team.A: Team.B,
    Team.B: Team.A,
}


def opponent(team: Team) -> Team:
    """Map A to B and B to A."""
    return _OPPONENTS[team]


class Direction(Enum):
    """Cardinal directions as (d_row, d_col)."""
    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    @property
    def d_row(self) -> int:
        return self.value[0]

    @property
    def d_col(self) -> int:
        return self.value[1]


@dataclass(frozen=True, order=True)
class CellPosition:
    """A board cell. (0, 0) is the top-left corner."""
    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> 'CellPosition':
        """Return the cell shifted by (d_row, d_col). May be out of bounds."""
        return CellPosition(self.row + d_row, self.col + d_col)

    def __repr__(self) -> str:
        return f"({self.row},{self.col})"


@dataclass
class Unit:
    """A living unit on the board."""
    team: Team
    position: CellPosition
    hit_points: int


class Outcome(Enum):
    """Classification of an attack, shown to the players."""
    DEAD = auto()   # the attacked unit had 1 hp left
    HIT = auto()    # a unit was hit and survives
    NEAR = auto()   # no unit at target, but one within the 3x3 neighborhood
    MISS = auto()   # nothing nearby


class OperationKind(Enum):
    """What the current team chose to do this turn."""
    ATTACK = auto()
    MOVE = auto()


class Phase(Enum):
    """Step within a turn's interaction sequence."""
    OP_TYPE_SELECT = auto()       # choosing attack or move
    ATTACK_DEST_SELECT = auto()   # choosing an attack target
    MOVE_ACTOR_SELECT = auto()    # choosing which unit moves
    MOVE_DEST_SELECT = auto()     # choosing where it moves
    ANIMATING = auto()            # committed, waiting for the UI to catch up
    BATTLE_FINISHED = auto()      # terminal

    @property
    def is_selecting(self) -> bool:
        """True for the phases that Back/cancel can leave."""
        return self in (
            Phase.ATTACK_DEST_SELECT,
            Phase.MOVE_ACTOR_SELECT,
            Phase.MOVE_DEST_SELECT,
        )


@dataclass
class CommitResult:
    """What a commit() did, for the presentation layer to animate."""
    kind: OperationKind
    team: Team
    destination: CellPosition
    source: Optional[CellPosition] = None     # moves only
    outcome: Optional[Outcome] = None         # attacks only
    unit_destroyed: bool = False


# =============================================================================
# EVENTS
# =============================================================================

@dataclass
class BattleEvent:
    """An event that occurred during battle (for UI to react to)."""
    pass


@dataclass
class PhaseChangedEvent(BattleEvent):
    """Turn phase changed."""
    old_phase: Phase
    new_phase: Phase


@dataclass
class AttackResolvedEvent(BattleEvent):
    """An attack was committed against a cell."""
    team: Team
    target: CellPosition
    outcome: Outcome


@dataclass
class UnitDestroyedEvent(BattleEvent):
    """A unit lost its last hit point and left the roster."""
    team: Team
    position: CellPosition


@dataclass
class UnitMovedEvent(BattleEvent):
    """A unit changed cells."""
    team: Team
    source: CellPosition
    destination: CellPosition


@dataclass
class TurnStartedEvent(BattleEvent):
    """Control passed to a team."""
    team: Team
    turn_number: int


@dataclass
class BattleEndedEvent(BattleEvent):
    """One team has no units left."""
    winner: Team
    turn_number: int
