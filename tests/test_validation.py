"""Tests for the tri-state validation machine and the message catalog."""

import pytest

from boardcore import validation
from boardcore.grammar import MoveGrammar
from boardcore.messages import MESSAGES, set_translator, translate
from boardcore.validation import ValidationState, classify_candidate


class TestVerdicts:
    """Mapping of states onto ValidationResult fields."""

    @pytest.mark.parametrize(
        "state,valid,complete",
        [
            (ValidationState.EMPTY, True, -1),
            (ValidationState.PARTIAL, True, -1),
            (ValidationState.AMBIGUOUS, True, 0),
            (ValidationState.COMPLETE, True, 1),
            (ValidationState.INVALID, False, None),
        ],
    )
    def test_state_fields(self, state, valid, complete) -> None:
        result = validation.verdict(state)
        assert result.valid is valid
        assert result.complete == complete
        assert result.message_key is not None
        assert result.message

    def test_canrender_only_for_renderable_states(self) -> None:
        assert validation.partial().canrender is True
        assert validation.complete().canrender is True
        assert validation.empty().canrender is None
        assert validation.invalid().canrender is None

    def test_params_flow_into_message(self) -> None:
        result = validation.invalid("validation.general.OCCUPIED", where="c4")
        assert result.message == "The cell c4 is already occupied."
        assert result.params == {"where": "c4"}

    @pytest.mark.parametrize(
        "builder,state",
        [
            (validation.empty, ValidationState.PARTIAL),
            (validation.partial, ValidationState.PARTIAL),
            (validation.ambiguous, ValidationState.AMBIGUOUS),
            (validation.complete, ValidationState.COMPLETE),
            (validation.invalid, ValidationState.INVALID),
        ],
    )
    def test_state_of(self, builder, state) -> None:
        """EMPTY and PARTIAL share a wire form and read back as PARTIAL."""
        assert validation.state_of(builder()) is state


class TestClassifyCandidate:
    """Classification against an authoritative move list."""

    grammar = MoveGrammar(separators=("-",), keywords=("pass",))

    def test_empty(self) -> None:
        assert classify_candidate("", ["a1"], self.grammar) is ValidationState.EMPTY

    def test_member_is_complete(self) -> None:
        assert classify_candidate("a1-b2", ["a1-b2"], self.grammar) is ValidationState.COMPLETE

    def test_member_is_complete_even_when_extended(self) -> None:
        moves = ["a1-b2", "a1-b2-c3"]
        assert classify_candidate("a1-b2", moves, self.grammar) is ValidationState.COMPLETE

    def test_whole_shaped_prefix_is_ambiguous(self) -> None:
        moves = ["a1-b2-c3"]
        assert classify_candidate("a1-b2", moves, self.grammar, min_cells=2) is ValidationState.AMBIGUOUS

    def test_short_prefix_is_partial(self) -> None:
        moves = ["a1-b2-c3"]
        assert classify_candidate("a1-b2", moves, self.grammar, min_cells=3) is ValidationState.PARTIAL
        assert classify_candidate("a1", moves, self.grammar, min_cells=2) is ValidationState.PARTIAL

    def test_trailing_separator_is_partial(self) -> None:
        assert classify_candidate("a1-", ["a1-b2"], self.grammar) is ValidationState.PARTIAL

    def test_mid_token_prefix_is_partial(self) -> None:
        assert classify_candidate("a", ["a1-b2"], self.grammar) is ValidationState.PARTIAL
        assert classify_candidate("pa", ["pass"], self.grammar) is ValidationState.PARTIAL

    def test_prefix_must_end_on_token_boundary(self) -> None:
        """``a1`` is not a prefix of ``a10``."""
        assert classify_candidate("a1", ["a10"], self.grammar) is ValidationState.INVALID

    def test_unrelated_move_is_invalid(self) -> None:
        assert classify_candidate("c3", ["a1-b2"], self.grammar) is ValidationState.INVALID
        assert classify_candidate("c", ["a1-b2"], self.grammar) is ValidationState.INVALID

    def test_malformed_is_invalid(self) -> None:
        assert classify_candidate("a1x", ["a1-b2"], self.grammar) is ValidationState.INVALID


class TestMessages:
    """Catalog lookups and the translator hook."""

    def test_every_catalog_entry_is_addressable(self) -> None:
        for key in MESSAGES:
            assert isinstance(translate(key), str)

    def test_unknown_key_falls_back_to_key(self) -> None:
        assert translate("validation.nowhere.NOTHING") == "validation.nowhere.NOTHING"

    def test_missing_params_return_template(self) -> None:
        assert translate("validation.general.OCCUPIED") == MESSAGES["validation.general.OCCUPIED"]

    def test_custom_translator(self) -> None:
        """Hosts receive the key and params and choose the wording."""
        seen = []

        def translator(key, **params):
            seen.append((key, params))
            return f"<{key}>"

        set_translator(translator)
        result = validation.invalid("validation.general.OCCUPIED", where="a1")
        assert result.message == "<validation.general.OCCUPIED>"
        assert seen == [("validation.general.OCCUPIED", {"where": "a1"})]

        set_translator(None)
        assert translate("validation.general.VALID_MOVE") == "Valid move."
