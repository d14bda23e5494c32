"""
Turn/rule engine for a two-team grid skirmish.

This package provides pure game logic for the battle: unit roster,
attack/move legality, attack outcome classification and the turn state
machine, separated from UI/rendering concerns.

Example usage:
    from grid_skirmish import (
        BattleController, CellPosition, OperationKind, PlacementBoard, Team
    )

    board = PlacementBoard()
    for col in range(4):
        board.toggle(Team.A, CellPosition(0, col))
        board.toggle(Team.B, CellPosition(4, col))

    battle = BattleController.from_placements(board.placements())

    battle.select_operation_type(OperationKind.ATTACK)
    battle.select_cell(CellPosition(1, 0))
    result = battle.commit()
    print(result.outcome.name)              # MISS / NEAR / HIT / DEAD
    battle.acknowledge_animation_finished()  # once the effect has played
"""

# Core models
from .models import (
    Team,
    opponent,
    Direction,
    CellPosition,
    Unit,
    Outcome,
    OperationKind,
    Phase,
    CommitResult,
    BattleEvent,
    PhaseChangedEvent,
    AttackResolvedEvent,
    UnitDestroyedEvent,
    UnitMovedEvent,
    TurnStartedEvent,
    BattleEndedEvent,
)

# Main controller
from .controller import BattleController, TurnState

# Placement phase
from .placement import (
    PlacementBoard,
    PlacementResult,
    InvalidPlacementError,
    validate_placements,
)

# State and rules (for advanced usage)
from .roster import Roster
from .rules import attackable_cells, movable_cells, classify_attack
from .config import Settings, get_settings, configure_logging

__all__ = [
    # Core models
    "Team",
    "opponent",
    "Direction",
    "CellPosition",
    "Unit",
    "Outcome",
    "OperationKind",
    "Phase",
    "CommitResult",
    "BattleEvent",
    "PhaseChangedEvent",
    "AttackResolvedEvent",
    "UnitDestroyedEvent",
    "UnitMovedEvent",
    "TurnStartedEvent",
    "BattleEndedEvent",
    # Main controller
    "BattleController",
    "TurnState",
    # Placement
    "PlacementBoard",
    "PlacementResult",
    "InvalidPlacementError",
    "validate_placements",
    # State and rules
    "Roster",
    "attackable_cells",
    "movable_cells",
    "classify_attack",
    # Config
    "Settings",
    "get_settings",
    "configure_logging",
]
