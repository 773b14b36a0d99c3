"""Tests for monster creation and placement."""

import random

import pytest

from engine.grid import border_cells, generate_obstacles
from engine.monsters import create_monster, spawn_monsters


class TestCreateMonster:
    """Tests for create_monster()."""

    def test_full_health(self):
        monster = create_monster(3, (4, 5), "🦇", 50)
        assert monster.id == 3
        assert monster.position == (4, 5)
        assert monster.health == monster.max_health == 50
        assert not monster.defeated


class TestSpawnMonsters:
    """Tests for spawn_monsters()."""

    def test_places_on_free_tiles(self):
        rng = random.Random(9)
        obstacles = generate_obstacles(15, 15, rng)
        taken = {(1, 1), (13, 13)}
        monsters = spawn_monsters(5, 15, obstacles, taken, ["🐉", "👹"], 50, rng)

        assert [m.id for m in monsters] == [0, 1, 2, 3, 4]
        positions = [m.position for m in monsters]
        assert len(set(positions)) == 5
        for pos in positions:
            assert pos not in obstacles
            assert pos not in taken
            assert 1 <= pos[0] <= 13 and 1 <= pos[1] <= 13
        assert {m.type for m in monsters} <= {"🐉", "👹"}

    def test_seeded_placement_repeats(self):
        obstacles = border_cells(15)
        first = spawn_monsters(5, 15, obstacles, set(), ["🐺"], 50, random.Random(2))
        second = spawn_monsters(5, 15, obstacles, set(), ["🐺"], 50, random.Random(2))
        assert [m.position for m in first] == [m.position for m in second]

    def test_not_enough_room(self):
        obstacles = border_cells(5)
        with pytest.raises(ValueError):
            spawn_monsters(10, 5, obstacles, set(), ["🐺"], 50, random.Random(1))
