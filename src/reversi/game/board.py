"""
Board module for Reversi.
Holds the immutable 8x8 board value and the cell/color constants.
"""
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union
import numpy as np

# Cell states
EMPTY = 0
BLACK = 1  # Moves first
WHITE = 2

SIZE = 8

# Bit i of a bitboard is cell (i // SIZE, i % SIZE)
FULL = (1 << (SIZE * SIZE)) - 1

Position = Tuple[int, int]

# Returned by move selection when the side to act has no legal move
NO_MOVE: Position = (-1, -1)

_SYMBOLS = {EMPTY: '.', BLACK: 'B', WHITE: 'W'}
_PARSE = {'.': EMPTY, '-': EMPTY, 'B': BLACK, 'X': BLACK, 'W': WHITE, 'O': WHITE}


class OutOfBoardError(ValueError):
    """Raised when a coordinate falls outside the 8x8 grid."""

    def __init__(self, row: int, col: int):
        super().__init__(f"Position ({row}, {col}) is outside the {SIZE}x{SIZE} board")
        self.row = row
        self.col = col


def opposite_color(color: int) -> int:
    """Return the other player's color. EMPTY maps to itself."""
    if color == EMPTY:
        return EMPTY
    return BLACK if color == WHITE else WHITE


def check_position(row: int, col: int) -> None:
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise OutOfBoardError(row, col)


def check_color(color: int) -> None:
    if color not in (BLACK, WHITE):
        raise ValueError(f"Expected BLACK ({BLACK}) or WHITE ({WHITE}), got {color!r}")


def popcount(bits: int) -> int:
    return bin(bits).count('1')


def iter_bits(bits: int) -> Iterator[int]:
    """Indices of the set bits, lowest first (row-major order)."""
    while bits:
        low = bits & -bits
        yield low.bit_length() - 1
        bits ^= low


def position_bit(row: int, col: int) -> int:
    check_position(row, col)
    return 1 << (row * SIZE + col)


def bit_position(index: int) -> Position:
    return divmod(index, SIZE)


class Board:
    """
    Immutable Reversi board.

    The discs are held as two 64-bit masks, one per color, so deriving a
    child position during search is a couple of integer operations. The
    numpy view returned by `cells` is built on first access and is
    read-only; every move produces a new Board, so a board handed to a
    caller never changes underneath it.
    """

    SIZE = SIZE
    EMPTY = EMPTY
    BLACK = BLACK
    WHITE = WHITE

    __slots__ = ('_black', '_white', '_cells')

    def __init__(self, cells: Union[np.ndarray, Sequence[Sequence[int]], None] = None):
        """
        Create a board from an 8x8 grid of cell states.

        Args:
            cells: Nested sequence or array of EMPTY/BLACK/WHITE values.
                An empty board is created when omitted.
        """
        self._cells: Optional[np.ndarray] = None
        self._black = 0
        self._white = 0
        if cells is None:
            return

        array = np.asarray(cells)
        if array.shape != (SIZE, SIZE):
            raise ValueError(f"Only {SIZE}x{SIZE} boards are supported, got shape {array.shape}")
        # Checked before any narrowing cast: 1.7 or 257 must not turn into a color
        if array.dtype.kind not in 'iu':
            raise ValueError(f"Board cells must be integers, got dtype {array.dtype}")
        if not np.isin(array, (EMPTY, BLACK, WHITE)).all():
            raise ValueError("Board cells must be EMPTY, BLACK or WHITE")

        for index in np.flatnonzero(array == BLACK):
            self._black |= 1 << int(index)
        for index in np.flatnonzero(array == WHITE):
            self._white |= 1 << int(index)

    @classmethod
    def from_bits(cls, black: int, white: int) -> 'Board':
        """Build a board from one bitboard per color."""
        if black & white:
            raise ValueError("A cell cannot hold both colors")
        if (black | white) & ~FULL or black < 0 or white < 0:
            raise ValueError(f"Bitboards must fit in {SIZE * SIZE} bits")
        return cls._wrap(black, white)

    @classmethod
    def _wrap(cls, black: int, white: int) -> 'Board':
        board = cls.__new__(cls)
        board._black = black
        board._white = white
        board._cells = None
        return board

    @classmethod
    def initial(cls) -> 'Board':
        """Standard starting position: two discs of each color in the center."""
        mid = SIZE // 2
        black = position_bit(mid - 1, mid) | position_bit(mid, mid - 1)
        white = position_bit(mid - 1, mid - 1) | position_bit(mid, mid)
        return cls._wrap(black, white)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'Board':
        return cls(rows)

    @classmethod
    def from_string(cls, text: str) -> 'Board':
        """
        Parse a board diagram.

        Each of the 8 non-blank lines describes one row; whitespace is ignored,
        '.' or '-' is empty, 'B'/'X' is black and 'W'/'O' is white.
        """
        lines = [line.replace(' ', '') for line in text.strip().splitlines() if line.strip()]
        if len(lines) != SIZE or any(len(line) != SIZE for line in lines):
            raise ValueError(f"Board diagram must have {SIZE} rows of {SIZE} cells")
        try:
            rows = [[_PARSE[ch.upper()] for ch in line] for line in lines]
        except KeyError as e:
            raise ValueError(f"Unknown cell symbol {e.args[0]!r} in board diagram") from None
        return cls(rows)

    def bits(self, color: int) -> int:
        """Bitboard of the cells holding `color` (EMPTY gives the free cells)."""
        if color == BLACK:
            return self._black
        if color == WHITE:
            return self._white
        if color == EMPTY:
            return FULL ^ (self._black | self._white)
        raise ValueError(f"Unknown cell state {color!r}")

    @property
    def cells(self) -> np.ndarray:
        """Read-only numpy view of the cells."""
        if self._cells is None:
            flat = np.zeros(SIZE * SIZE, dtype=np.int8)
            flat[np.fromiter(iter_bits(self._black), dtype=np.intp)] = BLACK
            flat[np.fromiter(iter_bits(self._white), dtype=np.intp)] = WHITE
            array = flat.reshape(SIZE, SIZE)
            array.flags.writeable = False
            self._cells = array
        return self._cells

    @property
    def rows(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(tuple(self._cell(row * SIZE + col) for col in range(SIZE))
                     for row in range(SIZE))

    def _cell(self, index: int) -> int:
        if (self._black >> index) & 1:
            return BLACK
        if (self._white >> index) & 1:
            return WHITE
        return EMPTY

    def __getitem__(self, position: Position) -> int:
        row, col = position
        check_position(row, col)
        return self._cell(row * SIZE + col)

    def to_array(self) -> np.ndarray:
        """Writable copy of the cells."""
        return self.cells.copy()

    def count(self, color: int) -> int:
        return popcount(self.bits(color))

    def empty_count(self) -> int:
        return SIZE * SIZE - popcount(self._black | self._white)

    def with_mask(self, color: int, mask: int) -> 'Board':
        """Return a new board with every cell in `mask` set to `color`."""
        black = self._black & ~mask
        white = self._white & ~mask
        if color == BLACK:
            black |= mask
        elif color == WHITE:
            white |= mask
        elif color != EMPTY:
            raise ValueError(f"Unknown cell state {color!r}")
        return Board._wrap(black, white)

    def with_discs(self, color: int, positions: Iterable[Position]) -> 'Board':
        """Return a new board with every given position set to `color`."""
        mask = 0
        for row, col in positions:
            mask |= position_bit(row, col)
        return self.with_mask(color, mask)

    def positions(self, color: int) -> List[Position]:
        """Positions holding `color`, in row-major order."""
        return [bit_position(index) for index in iter_bits(self.bits(color))]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._black == other._black and self._white == other._white

    def __hash__(self) -> int:
        return hash((self._black, self._white))

    def __repr__(self) -> str:
        return f"Board(black={self.count(BLACK)}, white={self.count(WHITE)}, empty={self.empty_count()})"

    def __str__(self) -> str:
        header = '  ' + ' '.join(str(c) for c in range(SIZE))
        lines = [header]
        for r, row in enumerate(self.rows):
            lines.append(f"{r} " + ' '.join(_SYMBOLS[cell] for cell in row))
        return '\n'.join(lines)


def create_initial_board() -> Board:
    return Board.initial()
