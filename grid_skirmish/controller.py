"""
Turn controller - the battle state machine.
NO UI DEPENDENCIES.

The presentation layer issues commands (select_operation_type, select_cell,
commit, cancel, acknowledge_animation_finished) and reads state back through
the query methods. Illegal commands are ignored: they return False (or None
from commit) and change nothing.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .config import Settings, get_settings
from .models import (
    AttackResolvedEvent,
    BattleEndedEvent,
    BattleEvent,
    CellPosition,
    CommitResult,
    OperationKind,
    Phase,
    PhaseChangedEvent,
    Team,
    TurnStartedEvent,
    Unit,
    UnitDestroyedEvent,
    UnitMovedEvent,
    opponent,
)
from .placement import InvalidPlacementError, validate_placements
from .roster import Roster
from .rules import attackable_cells, classify_attack, movable_cells

logger = logging.getLogger(__name__)


@dataclass
class TurnState:
    """Whose turn it is, and what has been selected so far this turn."""
    current_team: Team
    turn_number: int = 1
    phase: Phase = Phase.OP_TYPE_SELECT
    attack_target: Optional[CellPosition] = None
    move_actor: Optional[CellPosition] = None
    move_destination: Optional[CellPosition] = None
    winner: Optional[Team] = None

    def clear_selections(self) -> None:
        self.attack_target = None
        self.move_actor = None
        self.move_destination = None


class BattleController:
    """
    Sequences player intent into committed board mutations.

    A commit mutates the roster immediately, then parks the battle in
    ANIMATING. The turn handoff (next team, turn counter, win check) only
    happens on acknowledge_animation_finished(), so the logical state never
    runs ahead of what the UI shows.

    Usage:
        controller = BattleController.from_placements({
            Team.A: [CellPosition(0, 0), ...],
            Team.B: [CellPosition(4, 4), ...],
        })
        controller.select_operation_type(OperationKind.ATTACK)
        controller.select_cell(CellPosition(1, 1))
        result = controller.commit()
        # UI plays result.outcome, then:
        controller.acknowledge_animation_finished()
    """

    def __init__(self, roster: Roster, settings: Optional[Settings] = None):
        self.settings = settings if settings is not None else get_settings()
        self.roster = roster
        self.state = TurnState(current_team=Team(self.settings.starting_team))

        # Cells highlighted for the current selection phase
        self._legal_cells: Set[CellPosition] = set()

        # Event queue for UI notifications
        self._events: List[BattleEvent] = []

        logger.info(
            f"Battle started: A={roster.count_alive(Team.A)} units, "
            f"B={roster.count_alive(Team.B)} units, team {self.state.current_team.value} first"
        )
        self._events.append(TurnStartedEvent(self.state.current_team, self.state.turn_number))

    @classmethod
    def from_placements(cls, placements: Dict[Team, Iterable[CellPosition]],
                        settings: Optional[Settings] = None) -> 'BattleController':
        """
        Start a battle from the placement phase's per-team position lists.
        Raises InvalidPlacementError unless each team placed exactly the right count.
        """
        settings = settings if settings is not None else get_settings()
        placements = {team: list(positions) for team, positions in placements.items()}
        problems = validate_placements(
            placements,
            size=settings.board_size,
            units_per_team=settings.units_per_team,
        )
        if problems:
            raise InvalidPlacementError(problems)
        roster = Roster.from_positions(placements, max_hit_points=settings.max_hit_points)
        return cls(roster, settings)

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def select_operation_type(self, kind: OperationKind) -> bool:
        """Choose attack or move for this turn. Only accepted in OP_TYPE_SELECT."""
        if self.state.phase != Phase.OP_TYPE_SELECT:
            return self._reject(f"select_operation_type({kind!r})")

        if kind == OperationKind.ATTACK:
            self._legal_cells = attackable_cells(
                self.state.current_team,
                self.roster,
                size=self.settings.board_size,
                radius=self.settings.attack_radius,
            )
            self._set_phase(Phase.ATTACK_DEST_SELECT)
        elif kind == OperationKind.MOVE:
            self._legal_cells = self.roster.positions(self.state.current_team)
            self._set_phase(Phase.MOVE_ACTOR_SELECT)
        else:
            return self._reject(f"select_operation_type({kind!r})")
        return True

    def select_cell(self, pos: CellPosition) -> bool:
        """Select a cell; what that means depends on the current phase."""
        phase = self.state.phase
        if phase == Phase.ATTACK_DEST_SELECT:
            return self._select_attack_target(pos)
        elif phase == Phase.MOVE_ACTOR_SELECT:
            return self._select_move_actor(pos)
        elif phase == Phase.MOVE_DEST_SELECT:
            return self._select_move_destination(pos)
        return self._reject(f"select_cell({pos})")

    def commit(self) -> Optional[CommitResult]:
        """
        Apply the pending attack or move.

        The roster changes right away; the turn does not advance until
        acknowledge_animation_finished(). Returns None if nothing is ready.
        """
        if not self.can_commit():
            self._reject("commit()")
            return None

        if self.state.phase == Phase.ATTACK_DEST_SELECT:
            result = self._commit_attack(self.state.attack_target)
        else:
            result = self._commit_move(self.state.move_actor, self.state.move_destination)

        self._legal_cells = set()
        self._set_phase(Phase.ANIMATING)
        return result

    def cancel(self) -> bool:
        """Back out of the current selection to OP_TYPE_SELECT. Never touches the roster."""
        if not self.state.phase.is_selecting:
            return self._reject("cancel()")
        self._enter_op_type_select()
        return True

    def acknowledge_animation_finished(self) -> bool:
        """Complete the deferred turn handoff after the UI finished its effect."""
        if self.state.phase != Phase.ANIMATING:
            return self._reject("acknowledge_animation_finished()")

        self.state.turn_number += 1
        self.state.current_team = opponent(self.state.current_team)
        self.state.clear_selections()

        winner = self._check_winner()
        if winner is not None:
            self.state.winner = winner
            self._set_phase(Phase.BATTLE_FINISHED)
            self._events.append(BattleEndedEvent(winner, self.state.turn_number))
            logger.info(f"Battle finished: team {winner.value} wins on turn {self.state.turn_number}")
            return True

        self._enter_op_type_select()
        self._events.append(TurnStartedEvent(self.state.current_team, self.state.turn_number))
        logger.info(f"Turn {self.state.turn_number}: team {self.state.current_team.value}")
        return True

    # =========================================================================
    # STATE QUERIES (for UI to read)
    # =========================================================================

    def current_phase(self) -> Phase:
        return self.state.phase

    def current_team(self) -> Team:
        return self.state.current_team

    def turn_number(self) -> int:
        return self.state.turn_number

    def winner(self) -> Optional[Team]:
        """The winning team, or None while the battle is on."""
        return self.state.winner

    def is_battle_over(self) -> bool:
        return self.state.phase == Phase.BATTLE_FINISHED

    def attackable_cells(self) -> Set[CellPosition]:
        """Legal attack targets for highlighting (empty outside ATTACK_DEST_SELECT)."""
        if self.state.phase != Phase.ATTACK_DEST_SELECT:
            return set()
        return set(self._legal_cells)

    def movable_cells(self) -> Set[CellPosition]:
        """Legal move destinations for highlighting (empty outside MOVE_DEST_SELECT)."""
        if self.state.phase != Phase.MOVE_DEST_SELECT:
            return set()
        return set(self._legal_cells)

    def legal_cells(self) -> Set[CellPosition]:
        """Whatever the current phase highlights: targets, actors, or destinations."""
        return set(self._legal_cells)

    def pending_selection(self) -> Tuple[Optional[CellPosition], Optional[CellPosition], Optional[CellPosition]]:
        """Get (attack_target, move_actor, move_destination)."""
        return (self.state.attack_target, self.state.move_actor, self.state.move_destination)

    def can_commit(self) -> bool:
        """Whether the Apply button should be enabled."""
        if self.state.phase == Phase.ATTACK_DEST_SELECT:
            return self.state.attack_target is not None
        if self.state.phase == Phase.MOVE_DEST_SELECT:
            return self.state.move_destination is not None
        return False

    def roster_snapshot(self, team: Team) -> Tuple[Unit, ...]:
        """Detached copies of team's living units."""
        return self.roster.snapshot(team)

    def drain_events(self) -> List[BattleEvent]:
        """Return and clear events queued since the last call."""
        events = self._events
        self._events = []
        return events

    # =========================================================================
    # PHASE HANDLERS
    # =========================================================================

    def _select_attack_target(self, pos: CellPosition) -> bool:
        if pos not in self._legal_cells:
            return self._reject(f"attack target {pos}")
        self.state.attack_target = pos
        return True

    def _select_move_actor(self, pos: CellPosition) -> bool:
        team = self.state.current_team
        if not self.roster.exists_at(team, pos):
            return self._reject(f"move actor {pos}")

        self.state.move_actor = pos
        self.state.move_destination = None
        self._legal_cells = movable_cells(
            pos,
            team,
            self.roster,
            size=self.settings.board_size,
            move_range=self.settings.move_range,
        )
        if self.state.phase != Phase.MOVE_DEST_SELECT:
            self._set_phase(Phase.MOVE_DEST_SELECT)
        return True

    def _select_move_destination(self, pos: CellPosition) -> bool:
        if pos in self._legal_cells:
            self.state.move_destination = pos
            return True

        # Picking another friendly unit switches the actor
        if pos != self.state.move_actor and self.roster.exists_at(self.state.current_team, pos):
            self._set_phase(Phase.MOVE_ACTOR_SELECT)
            return self._select_move_actor(pos)

        return self._reject(f"move destination {pos}")

    def _commit_attack(self, target: CellPosition) -> CommitResult:
        team = self.state.current_team
        defender = opponent(team)

        # Classify against the pre-damage roster
        outcome = classify_attack(target, self.roster, defender, size=self.settings.board_size)
        died = self.roster.apply_damage(defender, target)

        logger.info(f"Team {team.value} attacks {target}: {outcome.name}")
        self._events.append(AttackResolvedEvent(team, target, outcome))
        if died:
            self._events.append(UnitDestroyedEvent(defender, target))

        return CommitResult(
            kind=OperationKind.ATTACK,
            team=team,
            destination=target,
            outcome=outcome,
            unit_destroyed=bool(died),
        )

    def _commit_move(self, source: CellPosition, destination: CellPosition) -> CommitResult:
        team = self.state.current_team
        self.roster.move(team, source, destination)

        logger.info(f"Team {team.value} moves {source} -> {destination}")
        self._events.append(UnitMovedEvent(team, source, destination))

        return CommitResult(
            kind=OperationKind.MOVE,
            team=team,
            destination=destination,
            source=source,
        )

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _enter_op_type_select(self) -> None:
        self.state.clear_selections()
        self._legal_cells = set()
        self._set_phase(Phase.OP_TYPE_SELECT)

    def _set_phase(self, new_phase: Phase) -> None:
        old_phase = self.state.phase
        if old_phase == new_phase:
            return
        self.state.phase = new_phase
        self._events.append(PhaseChangedEvent(old_phase, new_phase))

    def _check_winner(self) -> Optional[Team]:
        for team in Team:
            if self.roster.is_winner(team):
                return team
        return None

    def _reject(self, command: str) -> bool:
        logger.debug(f"Ignored {command} in phase {self.state.phase.name}")
        return False

    # =========================================================================
    # CONVENIENCE METHODS FOR TESTING
    # =========================================================================

    def play_attack(self, target: CellPosition) -> Optional[CommitResult]:
        """
        Run a whole attack turn: select, commit, acknowledge.
        Returns None (and cancels back to OP_TYPE_SELECT) if any step is rejected.
        """
        if not self.select_operation_type(OperationKind.ATTACK):
            return None
        if not self.select_cell(target):
            self.cancel()
            return None
        result = self.commit()
        self.acknowledge_animation_finished()
        return result

    def play_move(self, actor: CellPosition, destination: CellPosition) -> Optional[CommitResult]:
        """
        Run a whole move turn: select, commit, acknowledge.
        Returns None (and cancels back to OP_TYPE_SELECT) if any step is rejected.
        """
        if not self.select_operation_type(OperationKind.MOVE):
            return None
        if not self.select_cell(actor) or not self.select_cell(destination):
            self.cancel()
            return None
        if self.state.move_destination != destination:
            # destination named another friendly unit and switched the actor
            self.cancel()
            return None
        result = self.commit()
        self.acknowledge_animation_finished()
        return result
