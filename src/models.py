# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Data models for the vocabulary puzzle generators.

Covers the three puzzle families:
- Crossword (grid of cells + placed words)
- DGA letter-reveal deduction chains
- Tic-Tac-Word 3x3 attribute boards
"""

from copy import deepcopy
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class WordEntry:
    """A normalized input word, derived once and never mutated."""
    text: str
    length: int
    start_char: str
    end_char: str
    pos_tag: Optional[str] = None
    clue: str = ""

    @classmethod
    def from_text(
        cls,
        text: str,
        pos_tag: Optional[str] = None,
        clue: str = "",
    ) -> 'WordEntry':
        return cls(
            text=text,
            length=len(text),
            start_char=text[0],
            end_char=text[-1],
            pos_tag=pos_tag,
            clue=clue,
        )


# ---------------------------------------------------------------------------
# Crossword
# ---------------------------------------------------------------------------

class Direction(Enum):
    ACROSS = "across"
    DOWN = "down"

    def perpendicular(self) -> 'Direction':
        return Direction.DOWN if self == Direction.ACROSS else Direction.ACROSS


@dataclass
class Cell:
    """Represents a single cell in the crossword grid."""
    char: str = ""
    is_active: bool = False
    number: Optional[int] = None  # Clue number if a word starts here


@dataclass
class PlacedWord:
    """A word that made it onto the grid."""
    word: str
    clue: str
    row: int
    col: int
    direction: Direction
    number: int = 0

    @property
    def length(self) -> int:
        return len(self.word)

    def cells(self) -> List[tuple]:
        """Grid positions covered by this word, first letter first."""
        if self.direction == Direction.ACROSS:
            return [(self.row, self.col + i) for i in range(len(self.word))]
        return [(self.row + i, self.col) for i in range(len(self.word))]


@dataclass
class CrosswordResult:
    """Output of the crossword placement engine."""
    grid: List[List[Cell]]
    placed_words: List[PlacedWord] = field(default_factory=list)
    unused_words: List[str] = field(default_factory=list)
    grid_size: int = 0

    @property
    def success(self) -> bool:
        return len(self.placed_words) > 0

    def clone(self) -> 'CrosswordResult':
        return deepcopy(self)

    def get_across_clues(self) -> List[tuple]:
        """(number, clue) pairs for across words, in number order."""
        return sorted(
            (w.number, w.clue) for w in self.placed_words
            if w.direction == Direction.ACROSS
        )

    def get_down_clues(self) -> List[tuple]:
        """(number, clue) pairs for down words, in number order."""
        return sorted(
            (w.number, w.clue) for w in self.placed_words
            if w.direction == Direction.DOWN
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'grid_size': self.grid_size,
            'rows': [
                "".join(cell.char if cell.is_active else "." for cell in row)
                for row in self.grid
            ],
            'numbers': [
                {'row': r, 'col': c, 'number': cell.number}
                for r, row in enumerate(self.grid)
                for c, cell in enumerate(row)
                if cell.number is not None
            ],
            'placed_words': [
                {
                    'number': w.number,
                    'direction': w.direction.value,
                    'row': w.row,
                    'col': w.col,
                    'word': w.word,
                    'clue': w.clue,
                }
                for w in self.placed_words
            ],
            'unused_words': list(self.unused_words),
        }

    def to_string(self, show_solution: bool = True) -> str:
        """Convert grid to string representation."""
        lines = []
        for row in self.grid:
            line = ""
            for cell in row:
                if not cell.is_active:
                    line += "■ "
                elif show_solution:
                    line += f"{cell.char} "
                else:
                    line += "_ "
            lines.append(line.rstrip())
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# DGA (letter-reveal deduction chain)
# ---------------------------------------------------------------------------

class RevealKind(Enum):
    """Which letter a DGA clue reveals, counted from the start or the end."""
    PREFIX1 = "prefix1"
    PREFIX2 = "prefix2"
    PREFIX3 = "prefix3"
    SUFFIX1 = "suffix1"
    SUFFIX2 = "suffix2"
    SUFFIX3 = "suffix3"

    @property
    def depth(self) -> int:
        return int(self.value[-1])

    @property
    def from_end(self) -> bool:
        return self.value.startswith("suffix")

    @property
    def min_length(self) -> int:
        # 2nd-position reveals need 4+ letters, 3rd-position reveals need 5+
        return {1: 1, 2: 4, 3: 5}[self.depth]

    def reveal(self, word: str) -> Optional[str]:
        """Character this kind reveals in word, or None if word is too short."""
        if len(word) < self.min_length:
            return None
        if self.from_end:
            return word[-self.depth]
        return word[self.depth - 1]


# Length of the indeterminate blank run in a visual spec
OPEN_RUN_LENGTH = 16


@dataclass(frozen=True)
class VisualSpec:
    """How a DGA clue is drawn: anchor letter, fixed blanks, one open run."""
    anchor_char: str
    leading_slots: int
    trailing_slots: int
    open_side: str  # 'leading' or 'trailing'
    open_run_length: int = OPEN_RUN_LENGTH

    @classmethod
    def for_kind(cls, kind: RevealKind, char: str) -> 'VisualSpec':
        blanks = kind.depth - 1
        if kind.from_end:
            return cls(anchor_char=char, leading_slots=0,
                       trailing_slots=blanks, open_side="leading")
        return cls(anchor_char=char, leading_slots=blanks,
                   trailing_slots=0, open_side="trailing")

    @property
    def text(self) -> str:
        run = "_" * self.open_run_length
        parts = ["_"] * self.leading_slots + [self.anchor_char]
        parts += ["_"] * self.trailing_slots
        if self.open_side == "leading":
            return " ".join([run] + parts)
        return " ".join(parts + [run])

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['text'] = self.text
        return data


@dataclass(frozen=True)
class DGAConstraint:
    """One candidate clue for one word."""
    kind: RevealKind
    revealed_char: str
    visual_spec: VisualSpec
    target_word: str
    overlap_score: int

    @property
    def is_ambiguous(self) -> bool:
        return self.overlap_score >= 2

    def matches(self, word: str) -> bool:
        return self.kind.reveal(word) == self.revealed_char


@dataclass
class DGAClue:
    """A selected clue as handed to the renderer."""
    id: int
    word: str
    kind: RevealKind
    anchor_char: str
    visual_spec: VisualSpec
    is_ambiguous: bool
    matching_words: List[str] = field(default_factory=list)

    @property
    def display_text(self) -> str:
        return self.visual_spec.text

    def matches(self, word: str) -> bool:
        return self.kind.reveal(word) == self.anchor_char


@dataclass
class DGAResult:
    """Output of the deductive chain assembler."""
    clues: List[DGAClue] = field(default_factory=list)
    word_bank: List[str] = field(default_factory=list)
    success: bool = False
    message: Optional[str] = None

    def clone(self) -> 'DGAResult':
        return deepcopy(self)

    @property
    def ambiguous_count(self) -> int:
        return sum(1 for clue in self.clues if clue.is_ambiguous)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'message': self.message,
            'word_bank': list(self.word_bank),
            'clues': [
                {
                    'id': clue.id,
                    'word': clue.word,
                    'kind': clue.kind.value,
                    'anchor_char': clue.anchor_char,
                    'display_text': clue.display_text,
                    'visual_spec': clue.visual_spec.to_dict(),
                    'is_ambiguous': clue.is_ambiguous,
                    'matching_words': list(clue.matching_words),
                }
                for clue in self.clues
            ],
        }

    def to_string(self, show_solution: bool = False) -> str:
        lines = ["Word bank: " + ", ".join(self.word_bank)]
        for clue in self.clues:
            line = f"{clue.id:>2}. {clue.display_text}"
            if show_solution:
                line += f"  -> {clue.word}"
            lines.append(line)
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Tic-Tac-Word
# ---------------------------------------------------------------------------

class TicTacDifficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class AttributeKind(Enum):
    LENGTH = "length"
    START = "start"
    END = "end"
    POS = "pos"
    POS_START = "pos_start"
    POS_END = "pos_end"
    POS_LENGTH = "pos_length"
    START_END = "start_end"
    LENGTH_START = "length_start"
    LENGTH_END = "length_end"


class AmbiguityBand(Enum):
    HIGH = "high"      # 4+ matching words
    MEDIUM = "medium"  # 2-3
    LOW = "low"        # exactly 1

    @classmethod
    def classify(cls, count: int) -> 'AmbiguityBand':
        if count >= 4:
            return cls.HIGH
        if count >= 2:
            return cls.MEDIUM
        return cls.LOW


@dataclass(frozen=True)
class ConstraintAttributes:
    """The attribute tuple a Tic-Tac-Word cell constrains."""
    length: Optional[int] = None
    start: Optional[str] = None
    end: Optional[str] = None
    pos: Optional[str] = None

    def matches(self, entry: WordEntry) -> bool:
        """True if entry has every attribute that is set here."""
        if self.length is not None and entry.length != self.length:
            return False
        if self.start is not None and entry.start_char != self.start:
            return False
        if self.end is not None and entry.end_char != self.end:
            return False
        if self.pos is not None and entry.pos_tag != self.pos:
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class ConstraintCandidate:
    """A bucket of words sharing the same (kind, attributes)."""
    key: str
    label: str
    attributes: ConstraintAttributes
    kind: AttributeKind
    matching_words: List[str]
    ambiguity: int
    band: AmbiguityBand


@dataclass
class TicTacCell:
    """A board cell; matching_words[0] is the assigned solution word."""
    key: str
    label: str
    attributes: ConstraintAttributes
    kind: AttributeKind
    ambiguity: int
    band: AmbiguityBand
    matching_words: List[str] = field(default_factory=list)

    @property
    def solution(self) -> str:
        return self.matching_words[0]


@dataclass
class TicTacGrid:
    id: int
    cells: List[TicTacCell] = field(default_factory=list)

    def solutions(self) -> List[str]:
        return [cell.solution for cell in self.cells]


@dataclass
class TicTacResult:
    """Output of the constraint board assembler."""
    grids: List[TicTacGrid] = field(default_factory=list)
    success: bool = False
    difficulty: TicTacDifficulty = TicTacDifficulty.MEDIUM
    message: Optional[str] = None

    def clone(self) -> 'TicTacResult':
        return deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'difficulty': self.difficulty.value,
            'message': self.message,
            'grids': [
                {
                    'id': grid.id,
                    'cells': [
                        {
                            'label': cell.label,
                            'kind': cell.kind.value,
                            'attributes': cell.attributes.to_dict(),
                            'ambiguity': cell.ambiguity,
                            'band': cell.band.value,
                            'solution': cell.solution,
                            'matching_words': list(cell.matching_words),
                        }
                        for cell in grid.cells
                    ],
                }
                for grid in self.grids
            ],
        }

    def to_string(self, show_solution: bool = False) -> str:
        blocks = []
        for grid in self.grids:
            lines = [f"Board {grid.id + 1}"]
            for r in range(3):
                row_cells = grid.cells[r * 3:(r + 1) * 3]
                texts = []
                for cell in row_cells:
                    text = cell.label
                    if show_solution:
                        text += f" ({cell.solution})"
                    texts.append(f"{text:<22}")
                lines.append(" | ".join(texts).rstrip())
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)
