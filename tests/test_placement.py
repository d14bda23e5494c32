"""
Tests for the placement phase and battle-start validation.
"""
import pytest

from grid_skirmish.config import Settings
from grid_skirmish.controller import BattleController
from grid_skirmish.models import Phase, Team
from grid_skirmish.placement import (
    InvalidPlacementError,
    PlacementBoard,
    PlacementResult,
    validate_placements,
)

from conftest import cell


class TestPlacementBoard:
    """Tests for toggling cells during placement."""

    def test_toggle_places_then_removes(self, settings):
        board = PlacementBoard(settings)

        assert board.toggle(Team.A, cell(1, 1)) == PlacementResult.PLACED
        assert board.positions(Team.A) == [cell(1, 1)]

        assert board.toggle(Team.A, cell(1, 1)) == PlacementResult.REMOVED
        assert board.positions(Team.A) == []

    def test_fifth_unit_rejected(self, settings):
        """The cap is enforced here, with a result the UI can show."""
        board = PlacementBoard(settings)
        for col in range(4):
            assert board.toggle(Team.A, cell(0, col)) == PlacementResult.PLACED

        assert board.toggle(Team.A, cell(0, 4)) == PlacementResult.REJECTED_FULL
        assert len(board.positions(Team.A)) == 4

    def test_full_team_can_still_pick_up(self, settings):
        board = PlacementBoard(settings)
        for col in range(4):
            board.toggle(Team.A, cell(0, col))

        assert board.toggle(Team.A, cell(0, 0)) == PlacementResult.REMOVED
        assert board.toggle(Team.A, cell(0, 4)) == PlacementResult.PLACED

    def test_out_of_bounds_rejected(self, settings):
        board = PlacementBoard(settings)
        assert board.toggle(Team.B, cell(5, 0)) == PlacementResult.REJECTED_OUT_OF_BOUNDS
        assert board.positions(Team.B) == []

    def test_teams_are_independent(self, settings):
        """Both teams may pick the same cell."""
        board = PlacementBoard(settings)
        assert board.toggle(Team.A, cell(2, 2)) == PlacementResult.PLACED
        assert board.toggle(Team.B, cell(2, 2)) == PlacementResult.PLACED

    def test_readiness(self, settings):
        board = PlacementBoard(settings)
        for col in range(4):
            board.toggle(Team.A, cell(0, col))

        assert board.is_complete(Team.A)
        assert not board.is_complete(Team.B)
        assert board.remaining(Team.B) == 4
        assert not board.is_ready()

        for col in range(4):
            board.toggle(Team.B, cell(4, col))
        assert board.is_ready()

    def test_clear(self, settings):
        board = PlacementBoard(settings)
        board.toggle(Team.A, cell(0, 0))
        board.clear(Team.A)
        assert board.remaining(Team.A) == 4

    def test_placements_start_a_battle(self, settings):
        board = PlacementBoard(settings)
        for col in range(4):
            board.toggle(Team.A, cell(0, col))
            board.toggle(Team.B, cell(4, col))

        battle = BattleController.from_placements(board.placements(), settings)
        assert battle.current_phase() == Phase.OP_TYPE_SELECT
        assert len(battle.roster_snapshot(Team.A)) == 4
        assert len(battle.roster_snapshot(Team.B)) == 4


class TestValidatePlacements:
    """Tests for validate_placements and from_placements."""

    def test_valid(self, placements):
        assert validate_placements(placements) == []

    def test_too_few_units(self, placements):
        placements[Team.B] = placements[Team.B][:3]
        problems = validate_placements(placements)

        assert len(problems) == 1
        assert "Team B" in problems[0]

    def test_missing_team(self, placements):
        del placements[Team.A]
        assert any("Team A" in p for p in validate_placements(placements))

    def test_off_board_and_duplicates(self, placements):
        placements[Team.A] = [cell(0, 0), cell(0, 0), cell(0, 1), cell(9, 9)]
        problems = validate_placements(placements)
        assert len(problems) == 2

    def test_battle_refused(self, placements, settings):
        """An invalid placement is a validation failure, not a half-built battle."""
        placements[Team.A] = placements[Team.A] + [cell(1, 1)]

        with pytest.raises(InvalidPlacementError) as exc_info:
            BattleController.from_placements(placements, settings)

        assert exc_info.value.problems
        assert "Team A" in str(exc_info.value)


class TestPlacementSettings:
    """The placement board follows the same settings as battle start."""

    def test_larger_board(self):
        """A 7x7 board accepts far cells and starts a battle with them."""
        settings = Settings(board_size=7, units_per_team=4, _env_file=None)
        board = PlacementBoard(settings)
        for row in range(4):
            assert board.toggle(Team.A, cell(row, 6)) == PlacementResult.PLACED
            assert board.toggle(Team.B, cell(6, row)) == PlacementResult.PLACED

        battle = BattleController.from_placements(board.placements(), settings)
        positions = {u.position for u in battle.roster_snapshot(Team.A)}
        assert cell(3, 6) in positions

    def test_unit_cap_from_settings(self):
        settings = Settings(units_per_team=2, _env_file=None)
        board = PlacementBoard(settings)
        board.toggle(Team.A, cell(0, 0))
        board.toggle(Team.A, cell(0, 1))

        assert board.toggle(Team.A, cell(0, 2)) == PlacementResult.REJECTED_FULL
        assert board.is_complete(Team.A)

    def test_default_board_reads_environment(self, monkeypatch):
        """Without explicit settings, the board uses get_settings()."""
        monkeypatch.setenv("GRID_SKIRMISH_BOARD_SIZE", "7")
        board = PlacementBoard()

        assert board.toggle(Team.A, cell(6, 6)) == PlacementResult.PLACED
