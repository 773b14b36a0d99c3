"""Tests for movement legality and damage rules."""

import pytest

from engine.catalog import default_characters
from engine.game import create_game
from engine.grid import border_cells
from engine.rules import (
    apply_damage,
    check_death,
    defeat,
    eliminate,
    is_move_legal,
    is_tile_clickable,
    strike_damage,
    validate_move,
    validate_teleport,
    wild_shape_reduce,
)
from models.characters import Monster, Player
from models.game_state import GamePhase, GameState


def _make_player(
    player_id: int = 0,
    character_id: str = "warrior",
    position: tuple[int, int] = (3, 3),
    health: int = 100,
) -> Player:
    """Helper to create a test player of the given archetype."""
    definition = next(c for c in default_characters() if c.id == character_id)
    return Player(
        id=player_id,
        name=f"Player {player_id + 1}",
        character=definition.id,
        position=position,
        health=health,
        max_health=100,
        color=definition.color,
        board_ability=definition.board_ability.model_copy(),
        combat_ability=definition.combat_ability.model_copy(),
    )


def _make_game_state(*players: Player, phase: GamePhase = GamePhase.PLAYING, moves: int = 3) -> GameState:
    """Helper to create a game mid-turn with a bordered board."""
    gs = create_game("test", seed=1)
    gs.players = list(players) or [_make_player(0), _make_player(1, "mage", (5, 5))]
    gs.monsters = [Monster(id=0, position=(8, 8), type="🐉", health=50, max_health=50)]
    gs.obstacles = border_cells(15) | {(4, 3)}
    gs.phase = phase
    gs.moves_left = moves
    return gs


class TestValidateMove:
    """Tests for validate_move()."""

    def test_orthogonal_step(self):
        gs = _make_game_state()
        valid, _ = validate_move(gs, gs.players[0], (3, 4))
        assert valid

    def test_diagonal_step(self):
        gs = _make_game_state()
        valid, _ = validate_move(gs, gs.players[0], (2, 2))
        assert valid

    def test_two_tiles_away(self):
        gs = _make_game_state()
        valid, error = validate_move(gs, gs.players[0], (3, 5))
        assert not valid
        assert error == "You can only move to adjacent tiles!"

    def test_staying_put_rejected(self):
        gs = _make_game_state()
        assert not is_move_legal(gs, gs.players[0], (3, 3))

    def test_no_moves_left(self):
        gs = _make_game_state(moves=0)
        valid, error = validate_move(gs, gs.players[0], (3, 4))
        assert not valid
        assert "roll" in error

    def test_obstacle_blocks(self):
        gs = _make_game_state()
        valid, error = validate_move(gs, gs.players[0], (4, 3))
        assert not valid
        assert "obstacle" in error

    def test_druid_walks_through_obstacles(self):
        gs = _make_game_state(_make_player(0, "druid"), _make_player(1, "mage", (9, 9)))
        assert is_move_legal(gs, gs.players[0], (4, 3))

    def test_druid_cannot_leave_board(self):
        gs = _make_game_state(_make_player(0, "druid", (0, 5)), _make_player(1, "mage", (9, 9)))
        valid, error = validate_move(gs, gs.players[0], (-1, 5))
        assert not valid
        assert "outside" in error

    def test_other_player_blocks_while_exploring(self):
        gs = _make_game_state(_make_player(0), _make_player(1, "mage", (3, 4)))
        valid, error = validate_move(gs, gs.players[0], (3, 4))
        assert not valid
        assert error == "Another player is on that tile!"

    def test_rogue_slips_past_players(self):
        gs = _make_game_state(_make_player(0, "rogue"), _make_player(1, "mage", (3, 4)))
        assert is_move_legal(gs, gs.players[0], (3, 4))

    def test_eliminated_player_does_not_block(self):
        other = _make_player(1, "mage", (3, 4))
        other.is_eliminated = True
        gs = _make_game_state(_make_player(0), other)
        assert is_move_legal(gs, gs.players[0], (3, 4))

    def test_stepping_on_player_allowed_in_pvp(self):
        gs = _make_game_state(_make_player(0), _make_player(1, "mage", (3, 4)), phase=GamePhase.PVP)
        assert is_move_legal(gs, gs.players[0], (3, 4))

    def test_wrong_phase(self):
        gs = _make_game_state(phase=GamePhase.COMBAT)
        valid, _ = validate_move(gs, gs.players[0], (3, 4))
        assert not valid


class TestTeleport:
    """Tests for validate_teleport()."""

    def test_far_empty_tile(self):
        gs = _make_game_state()
        assert validate_teleport(gs, gs.players[0], (12, 2))[0]

    def test_rejects_obstacle_monster_and_player(self):
        gs = _make_game_state()
        actor = gs.players[0]
        assert not validate_teleport(gs, actor, (4, 3))[0]
        assert not validate_teleport(gs, actor, (8, 8))[0]
        assert not validate_teleport(gs, actor, (5, 5))[0]
        assert not validate_teleport(gs, actor, (20, 20))[0]


class TestIsTileClickable:
    """Tests for is_tile_clickable()."""

    def test_adjacent_free_tile(self):
        gs = _make_game_state()
        assert is_tile_clickable(gs, 3, 4)
        assert not is_tile_clickable(gs, 4, 3)
        assert not is_tile_clickable(gs, 10, 10)

    def test_nothing_clickable_before_rolling(self):
        gs = _make_game_state(moves=0)
        assert not is_tile_clickable(gs, 3, 4)

    def test_teleport_makes_far_tiles_clickable(self):
        gs = _make_game_state(moves=0)
        gs.teleport_active = True
        assert is_tile_clickable(gs, 12, 2)
        assert not is_tile_clickable(gs, 8, 8)


class TestDamage:
    """Tests for strike_damage(), wild_shape_reduce() and apply_damage()."""

    def test_roll_plus_attack_minus_defense(self):
        assert strike_damage(7, 2, 1) == 8

    def test_damage_floor_is_one(self):
        assert strike_damage(5, 0, 10) == 1

    def test_wild_shape_halves(self):
        druid = _make_player(0, "druid")
        druid.wild_shape_rounds = 2
        assert wild_shape_reduce(12, druid) == 6
        assert wild_shape_reduce(7, druid) == 3
        assert wild_shape_reduce(1, druid) == 1

    def test_wild_shape_inactive(self):
        assert wild_shape_reduce(12, _make_player()) == 12

    def test_apply_damage_clamps_at_zero(self):
        player = _make_player(health=5)
        assert apply_damage(player, 12) == 0
        assert check_death(player)

    def test_apply_damage_partial(self):
        player = _make_player(health=20)
        apply_damage(player, 8)
        assert player.health == 12
        assert not check_death(player)

    def test_eliminate_and_defeat_are_flags(self):
        player = _make_player()
        eliminate(player)
        assert player.is_eliminated
        assert player.health == 0

        monster = Monster(id=0, position=(1, 1), type="🐺", health=10, max_health=50)
        defeat(monster)
        assert monster.defeated
        assert monster.health == 0


@pytest.mark.parametrize(
    "roll,attack,defense,expected",
    [(2, 0, 0, 2), (12, 5, 2, 15), (3, 0, 4, 1), (2, 0, 12, 1)],
)
def test_strike_damage_table(roll, attack, defense, expected):
    assert strike_damage(roll, attack, defense) == expected
