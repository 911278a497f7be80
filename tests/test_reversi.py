"""Tests for the reversi engine."""

import pytest

from boardcore.games import ReversiGame


class TestOpening:
    def test_initial_position(self, make_engine) -> None:
        engine = make_engine("reversi")
        assert engine.board == {"d5": 2, "e5": 1, "d4": 1, "e4": 2}
        assert engine.extras["scores"] == [2, 2]

    def test_opening_moves(self, make_engine) -> None:
        assert make_engine("reversi").moves() == ["c5", "d6", "e3", "f4"]

    def test_first_move_commits_one_ply(self, make_engine) -> None:
        """Fresh 8x8 game: the first listed move advances the stack by one."""
        engine = make_engine("reversi")
        moves = engine.moves()
        assert moves
        m = moves[0]
        engine.move(m)
        assert len(engine.stack) == 2
        assert engine.current_player == 2
        assert engine.last_move == m

    def test_placement_flips(self, make_engine) -> None:
        engine = make_engine("reversi").move("c5")
        assert engine.board["d5"] == 1
        assert engine.extras["scores"] == [4, 1]
        capture = engine.results[1]
        assert capture.type == "capture"
        assert capture.get("where") == "d5"
        assert capture.get("count") == 1
        assert capture.get("how") == "e5"

    @pytest.mark.parametrize("variant,size", [("standard-6", 6), ("standard-10", 10)])
    def test_board_sizes(self, make_engine, variant, size) -> None:
        engine = make_engine("reversi", [variant])
        assert len(engine.topology) == size * size
        assert len(engine.board) == 4

    def test_octagon_corners_removed(self, make_engine) -> None:
        engine = make_engine("reversi", ["octagon-8"])
        assert "a1" not in engine.topology
        assert "b1" not in engine.topology
        assert "c1" in engine.topology


class TestValidation:
    def test_occupied(self, make_engine) -> None:
        result = make_engine("reversi").validate_move("d5")
        assert not result.valid
        assert result.message_key == "validation.general.OCCUPIED"

    def test_off_board(self, make_engine) -> None:
        result = make_engine("reversi").validate_move("j9")
        assert result.message_key == "validation.general.INVALID_CELL"

    def test_illegal_pass(self, make_engine) -> None:
        result = make_engine("reversi").validate_move("pass")
        assert result.message_key == "validation.general.ILLEGAL_PASS"

    def test_typing_prefix(self, make_engine) -> None:
        result = make_engine("reversi").validate_move("c")
        assert result.valid
        assert result.complete == -1

    def test_prefix_of_no_legal_move(self, make_engine) -> None:
        """No opening placement starts with these letters, and passing is not allowed yet."""
        engine = make_engine("reversi")
        for candidate in ("z", "a", "p", "pa"):
            result = engine.validate_move(candidate)
            assert not result.valid, candidate
            assert result.message_key == "validation.general.INVALID_MOVE"

    def test_pass_prefix_when_forced(self, make_position) -> None:
        engine = make_position(ReversiGame, {"a1": 2, "b1": 1})
        assert engine.validate_move("pa").complete == -1
        assert engine.validate_move("").message_key == "validation.general.MUST_PASS"

    def test_whitespace_and_case(self, make_engine) -> None:
        assert make_engine("reversi").validate_move(" C5 ").complete == 1


class TestPassAndEnd:
    """Passing and scoring."""

    def test_forced_pass(self, make_position) -> None:
        engine = make_position(ReversiGame, {"a1": 2, "b1": 1})
        assert engine.moves() == ["pass"]
        assert engine.validate_move("pass").complete == 1
        engine.move("pass")
        assert engine.current_player == 2
        assert not engine.gameover
        assert engine.results[0].type == "pass"
        assert engine.results[0].get("who") == 1

    def test_game_ends_when_nobody_can_place(self, make_position) -> None:
        engine = make_position(ReversiGame, {"a1": 2, "b1": 1}, current_player=2)
        engine.move("c1")
        assert engine.gameover
        assert engine.winner == [2]
        assert engine.extras["scores"] == [0, 3]
        assert [r.type for r in engine.results][-2:] == ["eog", "winners"]

    def test_anti_reverses_the_result(self, make_position) -> None:
        engine = make_position(ReversiGame, {"a1": 2, "b1": 1}, current_player=2, variants=["anti"])
        engine.move("c1")
        assert engine.winner == [1]

    def test_tie_lists_both_players(self, make_position) -> None:
        board = {"a1": 1, "b1": 2, "h8": 2, "g8": 2, "a8": 2}
        engine = make_position(ReversiGame, board)
        assert engine.moves() == ["c1"]
        engine.move("c1")
        assert engine.gameover
        assert engine.winner == [1, 2]


class TestRender:
    def test_pieces_and_annotations(self, make_engine) -> None:
        engine = make_engine("reversi").move("c5")
        render = engine.render()
        rows = render.pieces.split("\n")
        assert len(rows) == 8
        assert rows[0] == "_"
        assert rows[3] == "-,-,A,A,A,-,-,-"
        types = [a["type"] for a in render.annotations]
        assert "enter" in types
        assert "dots" in types

    def test_octagon_blocked_cells(self, make_engine) -> None:
        render = make_engine("reversi", ["octagon-8"]).render()
        assert len(render.board["blocked"]) == 12
        assert {"row": 0, "col": 0} in render.board["blocked"]
