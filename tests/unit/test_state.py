"""
Unit tests for the game state machine.

Tests reset, clear, flag, win detection and pick dispatch.
"""
import random

import pytest
from minefield import (
    Action,
    BoardConfig,
    GameState,
    InvalidTileState,
    build_board,
    check_win,
    clear,
    flag,
    pick,
    reset,
)


def hidden_safe(state: GameState) -> list:
    """Indexes of hidden non-mine tiles."""
    return [
        i for i, tile in enumerate(state.board.tiles)
        if tile.is_hidden and not tile.is_mine
    ]


# ============================================================================
# Reset Tests
# ============================================================================

class TestReset:
    """Test starting a new game."""

    def test_reset_uses_reference_parameters(self) -> None:
        """Default reset is 10x8 with 10 mines."""
        state = reset(rng=random.Random(0))
        assert (state.width, state.height) == (10, 8)
        assert len(state.board.mine_indexes()) == 10

    def test_reset_starts_playing(self, rng: random.Random) -> None:
        """New game is neither over nor won."""
        state = reset(BoardConfig(5, 5, 3), rng)
        assert state.game_over is False
        assert state.win is False
        assert state.is_playing is True

    def test_reset_all_hidden_no_flags(self, rng: random.Random) -> None:
        """Every tile starts hidden and unflagged."""
        state = reset(BoardConfig(5, 5, 3), rng)
        assert all(t.is_hidden and not t.flagged for t in state.board.tiles)


# ============================================================================
# Clear Tests
# ============================================================================

class TestClear:
    """Test clearing tiles."""

    def test_clear_corner_reveals_only_corner(
        self, center_mine_state: GameState
    ) -> None:
        """Clearing a numbered corner reveals just that tile."""
        state = clear(0, center_mine_state)
        assert state.board[0].revealed is True
        assert len(hidden_safe(state)) == 7
        assert state.game_over is False

    def test_clear_mine_loses(self, center_mine_state: GameState) -> None:
        """Clearing a mine ends the game as a loss and shows the mine."""
        state = clear(4, center_mine_state)
        assert state.game_over is True
        assert state.win is False
        assert state.is_lost is True
        assert state.board[4].revealed is True

    def test_loss_leaves_safe_tiles_untouched(
        self, wall_state: GameState
    ) -> None:
        """Losing reveals every mine and nothing else."""
        before = clear(0, wall_state)
        after = clear(7, before)
        for index, tile in enumerate(after.board.tiles):
            if tile.is_mine:
                assert tile.revealed and not tile.flagged
            else:
                assert tile == before.board[index]

    def test_loss_removes_flags_from_mines(
        self, wall_state: GameState
    ) -> None:
        """Flagged mines are shown without their flag."""
        state = clear(7, flag(2, wall_state))
        assert state.board[2].revealed is True
        assert state.board[2].flagged is False

    def test_clear_flagged_mine_still_loses(
        self, center_mine_state: GameState
    ) -> None:
        """A flag does not protect a mine from being cleared."""
        state = clear(4, flag(4, center_mine_state))
        assert state.is_lost is True

    def test_clear_flagged_safe_tile_reveals(
        self, center_mine_state: GameState
    ) -> None:
        """Clearing a flagged safe tile reveals it and drops the flag."""
        state = clear(0, flag(0, center_mine_state))
        assert state.board[0].revealed is True
        assert state.board[0].flagged is False

    def test_clear_revealed_tile_is_noop(
        self, center_mine_state: GameState
    ) -> None:
        """Clearing an already revealed tile returns the same state."""
        state = clear(0, center_mine_state)
        assert clear(0, state) is state


# ============================================================================
# Flag Tests
# ============================================================================

class TestFlag:
    """Test flag toggling."""

    def test_flag_hidden_tile(self, center_mine_state: GameState) -> None:
        """Flagging a hidden tile marks it."""
        state = flag(1, center_mine_state)
        assert state.board[1].flagged is True
        assert state.board[1].is_hidden is True

    def test_flag_twice_restores_state(
        self, center_mine_state: GameState
    ) -> None:
        """Flag is its own inverse on a hidden tile."""
        state = flag(1, flag(1, center_mine_state))
        assert state == center_mine_state

    def test_flag_revealed_tile_is_noop(
        self, center_mine_state: GameState
    ) -> None:
        """Flagging a revealed tile returns the same state."""
        state = clear(0, center_mine_state)
        assert flag(0, state) is state

    def test_flag_does_not_mutate_input(
        self, center_mine_state: GameState
    ) -> None:
        """The input state keeps its tiles."""
        flag(1, center_mine_state)
        assert center_mine_state.board[1].flagged is False


# ============================================================================
# Win Tests
# ============================================================================

class TestWin:
    """Test win detection."""

    def test_last_safe_tile_wins(self, center_mine_state: GameState) -> None:
        """Revealing every safe tile wins and shows the mine."""
        state = center_mine_state
        for index in (0, 1, 2, 3, 5, 6, 7, 8):
            assert state.game_over is False
            state = clear(index, state)

        assert state.game_over is True
        assert state.win is True
        assert state.board[4].revealed is True

    def test_single_fill_can_win(self, corner_mine_state: GameState) -> None:
        """One clear that reveals all safe tiles wins immediately."""
        state = clear(0, corner_mine_state)
        assert state.win is True
        assert hidden_safe(state) == []

    def test_flagged_mines_revealed_on_win(
        self, corner_mine_state: GameState
    ) -> None:
        """Winning reveals mines even if they were flagged."""
        state = clear(0, flag(24, corner_mine_state))
        assert state.board[24].revealed is True
        assert state.board[24].flagged is False

    def test_check_win_while_safe_tiles_hidden(
        self, center_mine_state: GameState
    ) -> None:
        """check_win leaves an unfinished game alone."""
        assert check_win(center_mine_state) is center_mine_state

    def test_partial_clear_keeps_playing(self, wall_state: GameState) -> None:
        """Clearing one side of the wall does not win."""
        state = clear(0, wall_state)
        assert state.is_playing is True
        assert hidden_safe(state) == [3, 4, 8, 9, 13, 14]


# ============================================================================
# Pick Tests
# ============================================================================

class TestPick:
    """Test the unified action entry point."""

    def test_pick_clear(self, center_mine_state: GameState) -> None:
        """Action.CLEAR clears the tile."""
        state = pick(center_mine_state, Action.CLEAR, 0)
        assert state.board[0].revealed is True

    def test_pick_flag(self, center_mine_state: GameState) -> None:
        """Action.FLAG toggles the flag."""
        state = pick(center_mine_state, Action.FLAG, 0)
        assert state.board[0].flagged is True

    @pytest.mark.parametrize("action", ["clear", "flag"])
    def test_pick_accepts_string_actions(
        self, center_mine_state: GameState, action: str
    ) -> None:
        """String values dispatch like the enum members."""
        assert pick(center_mine_state, action, 0) == pick(
            center_mine_state, Action(action), 0
        )

    def test_unknown_action_is_noop(
        self, center_mine_state: GameState
    ) -> None:
        """Unrecognised actions return the input state."""
        assert pick(center_mine_state, "chord", 0) is center_mine_state

    @pytest.mark.parametrize("index", [-1, 9, 100])
    def test_off_board_index_is_noop(
        self, center_mine_state: GameState, index: int
    ) -> None:
        """Indexes outside the board return the input state."""
        assert pick(center_mine_state, Action.CLEAR, index) is center_mine_state

    @pytest.mark.parametrize("action", [Action.CLEAR, Action.FLAG, "other"])
    @pytest.mark.parametrize("index", [0, 4, 8])
    def test_game_over_ignores_everything(
        self, center_mine_state: GameState, action, index: int
    ) -> None:
        """After the game ends, pick returns the state unchanged."""
        lost = pick(center_mine_state, Action.CLEAR, 4)
        assert pick(lost, action, index) is lost

    def test_full_game_through_pick(self, wall_state: GameState) -> None:
        """A game played only through pick reaches a win."""
        state = pick(wall_state, Action.FLAG, 7)
        state = pick(state, Action.CLEAR, 0)
        state = pick(state, Action.CLEAR, 4)
        assert state.win is True
        assert all(state.board[i].revealed for i in (2, 7, 12))


# ============================================================================
# Serialization Tests
# ============================================================================

class TestTagVocabulary:
    """Test the tag-vocabulary dict form."""

    def test_to_dict_uses_tag_vocabulary(
        self, center_mine_state: GameState
    ) -> None:
        """Tiles are written as lists of tags."""
        data = flag(0, center_mine_state).to_dict()
        assert data["width"] == 3
        assert data["height"] == 3
        assert data["game_over"] is False
        assert data["win"] is False
        assert data["tiles"][0] == ["flag", "hidden", 1]
        assert data["tiles"][4] == ["hidden", "mine"]

    def test_from_dict_restores_state(self, wall_state: GameState) -> None:
        """A mid-game state survives the dict form."""
        state = clear(0, flag(9, wall_state))
        assert GameState.from_dict(state.to_dict()) == state

    def test_from_dict_rejects_bad_tiles(
        self, center_mine_state: GameState
    ) -> None:
        """Malformed tags raise InvalidTileState."""
        data = center_mine_state.to_dict()
        data["tiles"][0] = ["hidden"]
        with pytest.raises(InvalidTileState):
            GameState.from_dict(data)

    def test_from_dict_rejects_wrong_size(
        self, center_mine_state: GameState
    ) -> None:
        """Tile count must match the dimensions."""
        data = center_mine_state.to_dict()
        data["width"] = 4
        with pytest.raises(ValueError):
            GameState.from_dict(data)


# ============================================================================
# Observation Tests
# ============================================================================

class TestObservation:
    """Test observation arrays."""

    def test_observation_shape_and_dtype(self, wall_state: GameState) -> None:
        """Observation is (height, width) int8."""
        obs = wall_state.to_observation()
        assert obs.shape == (3, 5)
        assert obs.dtype.name == "int8"

    def test_observation_values(self, center_mine_state: GameState) -> None:
        """Hidden, flagged, numbered and mine tiles encode distinctly."""
        state = flag(1, clear(0, center_mine_state))
        obs = state.to_observation()
        assert obs[0, 0] == 1
        assert obs[0, 1] == -2
        assert obs[1, 1] == -1

        lost = clear(4, state)
        assert lost.to_observation()[1, 1] == 9
