"""
Pytest fixtures for Grid Skirmish tests.
"""

import pytest

from grid_skirmish.config import Settings, get_settings
from grid_skirmish.controller import BattleController
from grid_skirmish.models import CellPosition, Team
from grid_skirmish.roster import Roster


def cell(row: int, col: int) -> CellPosition:
    """Shorthand for CellPosition."""
    return CellPosition(row, col)


@pytest.fixture
def settings() -> Settings:
    """Default rules, pinned so the process environment cannot leak in."""
    return Settings(
        board_size=5,
        units_per_team=4,
        max_hit_points=3,
        move_range=2,
        attack_radius=1,
        starting_team="A",
        log_level="INFO",
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop the cached settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def placements():
    """Team A along the top row, team B along the bottom row."""
    return {
        Team.A: [cell(0, 0), cell(0, 1), cell(0, 2), cell(0, 3)],
        Team.B: [cell(4, 0), cell(4, 1), cell(4, 2), cell(4, 3)],
    }


@pytest.fixture
def controller(placements, settings) -> BattleController:
    """A fresh battle with the default placement, events already drained."""
    battle = BattleController.from_placements(placements, settings)
    battle.drain_events()
    return battle


@pytest.fixture
def duel(settings) -> BattleController:
    """One unit each, side by side: A at (2,2), B at (2,3)."""
    roster = Roster.from_positions({
        Team.A: [cell(2, 2)],
        Team.B: [cell(2, 3)],
    }, max_hit_points=settings.max_hit_points)
    battle = BattleController(roster, settings)
    battle.drain_events()
    return battle
