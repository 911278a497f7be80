"""Tests for the hex engine."""

from boardcore.games import HexGame

COLUMNS = "abcdefghijk"


class TestPlacement:
    def test_every_cell_is_open(self, make_engine) -> None:
        engine = make_engine("hex")
        assert len(engine.moves()) == 121
        assert "swap" not in engine.moves()

    def test_board_sizes(self, make_engine) -> None:
        assert len(make_engine("hex", ["size-9"]).moves()) == 81
        assert len(make_engine("hex", ["size-13"]).moves()) == 169

    def test_occupied(self, make_engine) -> None:
        engine = make_engine("hex").move("f6")
        result = engine.validate_move("f6")
        assert result.message_key == "validation.general.OCCUPIED"

    def test_column_prefix_must_be_on_the_board(self, make_engine) -> None:
        assert make_engine("hex").validate_move("k").complete == -1
        result = make_engine("hex", ["size-9"]).validate_move("k")
        assert not result.valid
        assert result.message_key == "validation.general.INVALID_MOVE"

    def test_unknown_letter(self, make_engine) -> None:
        assert not make_engine("hex").validate_move("z").valid


class TestSwap:
    """Pie rule."""

    def test_swap_offered_once(self, make_engine) -> None:
        engine = make_engine("hex").move("b1")
        assert "swap" in engine.moves()
        assert engine.instructions_key() == "validation.hex.SWAP_INSTRUCTIONS"
        engine.move("swap")
        assert engine.board == {"a2": 2}
        assert engine.current_player == 1
        assert engine.extras["swapped"] is True
        assert engine.results[0].type == "swap"
        assert "swap" not in engine.moves()

    def test_swap_rejected_later(self, make_engine) -> None:
        engine = make_engine("hex").move("b1").move("swap")
        result = engine.validate_move("swap")
        assert not result.valid
        assert result.message_key == "validation.hex.ILLEGAL_SWAP"

    def test_swap_rejected_for_first_player(self, make_engine) -> None:
        assert not make_engine("hex").validate_move("swap").valid
        assert not make_engine("hex").validate_move("sw").valid

    def test_swap_prefix_is_partial(self, make_engine) -> None:
        result = make_engine("hex").move("b1").validate_move("sw")
        assert result.valid
        assert result.complete == -1

    def test_swap_narration(self, make_engine) -> None:
        engine = make_engine("hex").move("b1").move("swap")
        assert engine.chat_log([])[1] == ["2", "Player 2 swapped sides."]


class TestConnection:
    def test_first_player_connects_rows(self, make_position) -> None:
        board = {f"a{row}": 1 for row in range(1, 11)}
        engine = make_position(HexGame, board)
        engine.move("a11")
        assert engine.gameover
        assert engine.winner == [1]
        assert engine.extras["connection"] == [f"a{row}" for row in range(1, 12)]

    def test_second_player_connects_columns(self, make_position) -> None:
        board = {f"{COLUMNS[x]}1": 2 for x in range(8)}
        engine = make_position(HexGame, board, current_player=2, variants=["size-9"])
        engine.move("i1")
        assert engine.winner == [2]
        assert len(engine.extras["connection"]) == 9

    def test_gap_means_no_winner(self, make_position) -> None:
        board = {f"a{row}": 1 for row in range(1, 10)}
        engine = make_position(HexGame, board)
        engine.move("b11")
        assert not engine.gameover

    def test_connection_rendered(self, make_position) -> None:
        board = {f"a{row}": 1 for row in range(1, 11)}
        engine = make_position(HexGame, board).move("a11")
        lines = [a for a in engine.render().annotations if a["type"] == "line"]
        assert len(lines) == 1
        assert len(lines[0]["targets"]) == 11
