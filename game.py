from contextlib import contextmanager

import numpy as np

PLAYER_X = 'X'
PLAYER_O = 'O'
EMPTY = None
DRAW = 'Draw'

BOARD_SIZE = 3
MARKS = (PLAYER_X, PLAYER_O)

# Characters read as an empty cell by Position.from_string
_EMPTY_CHARS = '.-_ '


def other_player(player):
    return PLAYER_O if player == PLAYER_X else PLAYER_X


def winning_lines(board):
    """The 8 lines of a grid: rows, then columns, then the two diagonals."""
    lines = [board[row] for row in range(BOARD_SIZE)]
    lines += [[board[row][col] for row in range(BOARD_SIZE)] for col in range(BOARD_SIZE)]
    lines.append([board[i][i] for i in range(BOARD_SIZE)])
    lines.append([board[i][BOARD_SIZE - 1 - i] for i in range(BOARD_SIZE)])
    return lines


class Position:
    """A 3x3 grid of cell marks.

    Cells hold ``PLAYER_X``, ``PLAYER_O`` or ``EMPTY``. The shape never
    changes; only the content is written, either by the caller applying a
    move or by the search engine through :meth:`place`.
    """

    def __init__(self, rows=None):
        self.board = [[EMPTY for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
        if rows is not None:
            if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
                raise ValueError(f"Position needs {BOARD_SIZE}x{BOARD_SIZE} rows")
            for r, row in enumerate(rows):
                for c, mark in enumerate(row):
                    self[r, c] = mark

    @classmethod
    def from_string(cls, text):
        """Build a position from 9 cell characters, e.g. ``"X.O/.X./..O"``."""
        cells = [ch for ch in text if ch not in '/\n\t|']
        if len(cells) != BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE * BOARD_SIZE} cells, got {len(cells)}: {text!r}")
        marks = []
        for ch in cells:
            if ch in _EMPTY_CHARS:
                marks.append(EMPTY)
            elif ch.upper() in MARKS:
                marks.append(ch.upper())
            else:
                raise ValueError(f"Unknown cell character {ch!r}")
        return cls([marks[i:i + BOARD_SIZE] for i in range(0, len(marks), BOARD_SIZE)])

    def _check_cell(self, row, col):
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise IndexError(f"Cell ({row}, {col}) is off the board")

    def __getitem__(self, cell):
        row, col = cell
        self._check_cell(row, col)
        return self.board[row][col]

    def __setitem__(self, cell, mark):
        row, col = cell
        self._check_cell(row, col)
        if mark is not EMPTY and mark not in MARKS:
            raise ValueError(f"Unknown mark {mark!r}")
        self.board[row][col] = mark

    @contextmanager
    def place(self, row, col, mark):
        """Mark an empty cell for the duration of the ``with`` block."""
        if self[row, col] is not EMPTY:
            raise ValueError(f"Cell ({row}, {col}) is already taken")
        self[row, col] = mark
        try:
            yield self
        finally:
            self.board[row][col] = EMPTY

    def empty_cells(self):
        # Row-major order; search tie-breaking depends on it
        return [(row, col)
                for row in range(BOARD_SIZE)
                for col in range(BOARD_SIZE)
                if self.board[row][col] is EMPTY]

    def count(self, mark):
        return sum(cell == mark for row in self.board for cell in row)

    def rows(self):
        return tuple(tuple(row) for row in self.board)

    def copy(self):
        return Position(self.board)

    def to_array(self):
        """Encode as an int8 array: +1 for X, -1 for O, 0 for empty."""
        encoding = {PLAYER_X: 1, PLAYER_O: -1, EMPTY: 0}
        return np.array([[encoding[cell] for cell in row] for row in self.board], dtype=np.int8)

    def __eq__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self.board == other.board

    def __repr__(self):
        text = '/'.join(''.join(cell or '.' for cell in row) for row in self.board)
        return f"Position({text!r})"

    def __str__(self):
        lines = [' ' + ' | '.join(cell or ' ' for cell in row) for row in self.board]
        return '\n-----------\n'.join(lines)


class TicTacToe:
    def __init__(self, first_player=PLAYER_X):
        if first_player not in MARKS:
            raise ValueError(f"Unknown player {first_player!r}")
        self.first_player = first_player
        self.position = Position()
        self.current_player = first_player
        self.winner = None
        self.history = []
        self.redo_stack = []

    @property
    def board(self):
        return self.position.board

    def reset_game(self):
        self.position = Position()
        self.current_player = self.first_player
        self.winner = None
        self.history = []
        self.redo_stack = []

    def _snapshot(self):
        return {
            'position': self.position.copy(),
            'player': self.current_player,
            'winner': self.winner
        }

    def _restore(self, state):
        self.position = state['position']
        self.current_player = state['player']
        self.winner = state['winner']

    def make_move(self, row, col):
        if self.winner is not None:
            return False
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE) or self.position[row, col] is not EMPTY:
            return False

        self.history.append(self._snapshot())
        self.redo_stack = []  # A new move invalidates redo

        self.position[row, col] = self.current_player
        self.check_winner()

        if not self.winner:
            self.current_player = other_player(self.current_player)
        return True

    def ai_move(self, ai):
        """Let a MinimaxAI play for the side to move and apply its choice."""
        if ai.player != self.current_player:
            raise ValueError(f"AI plays {ai.player} but it is {self.current_player}'s turn")
        row, col = ai.find_best_move(self.position)
        self.make_move(row, col)
        return row, col

    def undo(self):
        if not self.history:
            return False
        self.redo_stack.append(self._snapshot())
        self._restore(self.history.pop())
        return True

    def redo(self):
        if not self.redo_stack:
            return False
        self.history.append(self._snapshot())
        self._restore(self.redo_stack.pop())
        return True

    def check_winner(self):
        for line in winning_lines(self.position.board):
            if line[0] is not EMPTY and line.count(line[0]) == BOARD_SIZE:
                self.winner = line[0]
                return self.winner

        if not self.position.empty_cells():
            self.winner = DRAW
        return self.winner

    def get_available_moves(self):
        return self.position.empty_cells()

    def is_game_over(self):
        return self.winner is not None
