import logging

import numpy as np

from game import PLAYER_X, BOARD_SIZE, EMPTY, MARKS, other_player, winning_lines

logger = logging.getLogger(__name__)

WIN_SCORE = 10


class InvalidCall(ValueError):
    """Raised when a search is requested on a position with nothing left to play."""


class MinimaxAI:
    """Exhaustive minimax search for 3x3 tic-tac-toe.

    The engine always searches for ``self.player``: that player is the
    maximizer and every score is reported from its point of view. There is
    no pruning and no depth limit, so every value is exact.
    """

    def __init__(self, player=PLAYER_X, win_score=WIN_SCORE):
        # Terminal detection compares against +-win_score, so 0 would hide wins
        if isinstance(win_score, bool) or not isinstance(win_score, int) or win_score <= 0:
            raise ValueError(f"win_score must be a positive int, got {win_score!r}")
        self.win_score = win_score
        self.nodes = 0
        self.set_player(player)

    def set_player(self, player):
        """Set the player marker (X or O)."""
        if player not in MARKS:
            raise ValueError(f"Unknown player {player!r}")
        self.player = player
        self.opponent = other_player(player)

    def _score(self, mark):
        if mark == self.player: return self.win_score
        if mark == self.opponent: return -self.win_score
        return None

    def evaluate(self, position):
        board = position.board

        # Check rows
        for row in range(3):
            if board[row][0] == board[row][1] == board[row][2]:
                score = self._score(board[row][0])
                if score is not None: return score

        # Check columns
        for col in range(3):
            if board[0][col] == board[1][col] == board[2][col]:
                score = self._score(board[0][col])
                if score is not None: return score

        # Check diagonals
        if board[0][0] == board[1][1] == board[2][2]:
            score = self._score(board[0][0])
            if score is not None: return score

        if board[0][2] == board[1][1] == board[2][0]:
            score = self._score(board[0][2])
            if score is not None: return score

        return 0  # No winner, or a draw

    def is_moves_left(self, position):
        return any(cell is EMPTY for row in position.board for cell in row)

    def minimax(self, position, depth, is_maximizing):
        """Value of ``position`` under optimal play, with the maximizer to move if ``is_maximizing``.

        ``depth`` counts plies from the root. It is carried along for a
        future depth-aware tie-break and does not change the result.
        """
        self.nodes += 1
        score = self.evaluate(position)

        # Wins are read off the position regardless of whose turn it is
        if score == self.win_score:
            return score
        if score == -self.win_score:
            return score
        if not self.is_moves_left(position):
            return 0

        if is_maximizing:
            best = -float('inf')
            for row, col in position.empty_cells():
                with position.place(row, col, self.player):
                    best = max(best, self.minimax(position, depth + 1, False))
            return best
        else:
            best = float('inf')
            for row, col in position.empty_cells():
                with position.place(row, col, self.opponent):
                    best = min(best, self.minimax(position, depth + 1, True))
            return best

    def _check_searchable(self, position):
        player_count = position.count(self.player)
        opponent_count = position.count(self.opponent)
        assert abs(player_count - opponent_count) <= 1, (
            f"Malformed position, mark counts {self.player}={player_count} "
            f"{self.opponent}={opponent_count}: {position!r}")
        assert not (self._has_line(position, self.player) and self._has_line(position, self.opponent)), (
            f"Malformed position, both players have three in a row: {position!r}")

        if not self.is_moves_left(position):
            raise InvalidCall(f"No empty cell left to play: {position!r}")
        if self.evaluate(position) != 0:
            raise InvalidCall(f"Game is already decided: {position!r}")

    def _has_line(self, position, mark):
        return any(all(cell == mark for cell in line) for line in winning_lines(position.board))

    def find_best_move(self, position):
        """Return the ``(row, col)`` with the highest minimax value for ``self.player``.

        Ties go to the first cell in row-major order. The position is left
        exactly as it was passed in. Raises :class:`InvalidCall` if the
        board is full or the game is already won.
        """
        self._check_searchable(position)
        self.nodes = 0

        best_val = -float('inf')
        move = None
        for row, col in position.empty_cells():
            with position.place(row, col, self.player):
                move_val = self.minimax(position, 0, False)

            # Strict comparison keeps the earliest of equal moves
            if move_val > best_val:
                best_val = move_val
                move = (row, col)

        logger.debug("%s plays %s (value %s, %d nodes)", self.player, move, best_val, self.nodes)
        return move

    def move_values(self, position):
        """Minimax value of every empty cell for ``self.player``; occupied cells are NaN."""
        self._check_searchable(position)
        values = np.full((BOARD_SIZE, BOARD_SIZE), np.nan)
        for row, col in position.empty_cells():
            with position.place(row, col, self.player):
                values[row, col] = self.minimax(position, 0, False)
        return values


_default_ai = MinimaxAI(PLAYER_X)


def evaluate(position):
    """+WIN_SCORE if X has a line, -WIN_SCORE if O has, otherwise 0."""
    return _default_ai.evaluate(position)


def is_moves_left(position):
    return _default_ai.is_moves_left(position)


def find_best_move(position):
    """Best move for X, see :meth:`MinimaxAI.find_best_move`."""
    return _default_ai.find_best_move(position)
