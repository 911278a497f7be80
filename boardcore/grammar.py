"""Declared move-string grammar and its incremental tokenizer.

Move strings share one vocabulary across games:

==========  ===========================================
``-``       movement step (``a1-a3``, ``a1-c3-e3``)
``x``       capture (``a1xb2``)
``+``       placement onto / next to (``a1+b2``)
``,``       multi-cell or multi-target (``a1,b2,c3``)
``;``       compound / double move (``a1-a2;b1-b2``)
``*``       swap or selection-toggle prefix (``*a1``)
==========  ===========================================

A game declares which separators, prefix modifiers and keywords it uses by
building a :class:`MoveGrammar`. The tokenizer rejects anything else, so no
game needs its own regular expressions. Tokenizing a prefix of a valid move
succeeds and reports ``complete=False``, which is what incremental
validation needs.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import List, Literal, Tuple

from .errors import InvalidMoveError
from .messages import translate

SEPARATORS = {
    "-": "move",
    "x": "capture",
    "+": "place",
    ",": "multi",
    ";": "compound",
}
MODIFIERS = {
    "*": "toggle",
}

_CELL_RE = re.compile(r"[a-z][0-9]+")
_WHITESPACE_RE = re.compile(r"\s+")

TokenKind = Literal["cell", "separator", "modifier", "keyword"]


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str


@dataclass
class ParsedMove:
    """Tokenized move string.

    ``complete`` is false when the string ends mid-token (a trailing
    separator, a dangling modifier or a bare column letter).
    """
    raw: str
    tokens: List[Token] = field(default_factory=list)
    complete: bool = True

    @property
    def keyword(self) -> str | None:
        if len(self.tokens) == 1 and self.tokens[0].kind == "keyword":
            return self.tokens[0].value
        return None

    @property
    def cells(self) -> List[str]:
        return [t.value for t in self.tokens if t.kind == "cell"]

    @property
    def separators(self) -> List[str]:
        return [t.value for t in self.tokens if t.kind == "separator"]

    @property
    def modifiers(self) -> List[str]:
        return [t.value for t in self.tokens if t.kind == "modifier"]

    @property
    def segments(self) -> List[List[Token]]:
        """Tokens split on the compound separator ``;``."""
        segments: List[List[Token]] = [[]]
        for token in self.tokens:
            if token.kind == "separator" and token.value == ";":
                segments.append([])
            else:
                segments[-1].append(token)
        return segments


def _malformed(move: str) -> InvalidMoveError:
    key = "validation.general.MALFORMED"
    return InvalidMoveError(translate(key, move=move), key, {"move": move})


class MoveGrammar:
    """The token grammar one game accepts.

    Args:
        separators: Separator characters the game uses (subset of ``-x+,;``)
        modifiers: Prefix modifiers the game uses (subset of ``*``)
        keywords: Whole-move words such as ``pass`` or ``swap``
        allow_mixed: Whether one segment may combine different separators
    """

    def __init__(
        self,
        separators: Iterable[str] = ("-",),
        modifiers: Iterable[str] = (),
        keywords: Iterable[str] = ("pass",),
        allow_mixed: bool = False,
    ) -> None:
        self.separators: Tuple[str, ...] = tuple(separators)
        self.modifiers: Tuple[str, ...] = tuple(modifiers)
        self.keywords: Tuple[str, ...] = tuple(keywords)
        self.allow_mixed = allow_mixed
        unknown = [s for s in self.separators if s not in SEPARATORS]
        unknown += [m for m in self.modifiers if m not in MODIFIERS]
        if unknown:
            raise ValueError(f"Unknown grammar symbols: {unknown}")

    @staticmethod
    def normalize(move: str) -> str:
        """Lowercase and strip all whitespace."""
        return _WHITESPACE_RE.sub("", move.lower())

    def tokenize(self, move: str) -> ParsedMove:
        """Tokenize ``move``; raise InvalidMoveError if no valid move starts so."""
        text = self.normalize(move)
        parsed = ParsedMove(raw=text)
        if text == "":
            parsed.complete = False
            return parsed
        if text in self.keywords:
            parsed.tokens.append(Token("keyword", text))
            return parsed

        pos = 0
        expect_cell = True
        while pos < len(text):
            ch = text[pos]
            if expect_cell:
                if ch in self.modifiers and (not parsed.tokens or parsed.tokens[-1].kind == "separator"):
                    parsed.tokens.append(Token("modifier", ch))
                    pos += 1
                    continue
                match = _CELL_RE.match(text, pos)
                if match is not None:
                    parsed.tokens.append(Token("cell", match.group(0)))
                    pos = match.end()
                    expect_cell = False
                    continue
                if pos == len(text) - 1 and ch.isalpha():
                    # a bare column letter: the user is still typing
                    parsed.complete = False
                    return self._check_mixing(parsed)
                if any(kw.startswith(text) for kw in self.keywords):
                    parsed.complete = False
                    return parsed
                raise _malformed(text)
            if ch in self.separators:
                parsed.tokens.append(Token("separator", ch))
                expect_cell = True
                pos += 1
                continue
            if ch in SEPARATORS or ch in MODIFIERS:
                key = "validation.general.BAD_SEPARATOR"
                raise InvalidMoveError(translate(key, separator=ch), key, {"separator": ch})
            raise _malformed(text)

        parsed.complete = not expect_cell
        return self._check_mixing(parsed)

    def _check_mixing(self, parsed: ParsedMove) -> ParsedMove:
        if self.allow_mixed:
            return parsed
        for segment in parsed.segments:
            kinds = {t.value for t in segment if t.kind == "separator"}
            if len(kinds) > 1:
                raise _malformed(parsed.raw)
        return parsed

    def join(self, cells: Sequence[str], separator: str = "-") -> str:
        if separator not in self.separators:
            raise ValueError(f"Separator {separator!r} is not part of this grammar")
        return separator.join(cells)

    def extends(self, prefix: str, move: str) -> bool:
        """True when ``move`` continues ``prefix`` at a token boundary.

        ``a1`` is extended by ``a1-a3`` but not by ``a10``.
        """
        if len(move) <= len(prefix) or not move.startswith(prefix):
            return False
        return move[len(prefix)] in self.separators
