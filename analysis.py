import numpy as np

from game import TicTacToe, PLAYER_X, PLAYER_O, DRAW, other_player
from minimax_ai import MinimaxAI
from utils import get_plot_path

# to_array encoding back to marks
MARK_LABELS = {1: PLAYER_X, -1: PLAYER_O}


def self_play(first_player=PLAYER_X):
    """Play a full game where each side is a MinimaxAI bound to the player to move.

    Returns the list of moves played and the final winner (``'Draw'`` for a draw).
    """
    game = TicTacToe(first_player=first_player)
    engines = {first_player: MinimaxAI(first_player),
               other_player(first_player): MinimaxAI(other_player(first_player))}
    moves = []
    while not game.is_game_over():
        moves.append(game.ai_move(engines[game.current_player]))
    return moves, game.winner


def evaluate_against_random(num_games=100, ai_player='O', first_player=PLAYER_X, seed=None):
    """Play the engine against a uniformly random opponent and return win/loss/draw rates."""
    if num_games < 1:
        raise ValueError(f"num_games must be at least 1, got {num_games}")
    rng = np.random.default_rng(seed)
    ai = MinimaxAI(ai_player)
    wins, losses, draws = 0, 0, 0

    for _ in range(num_games):
        game = TicTacToe(first_player=first_player)
        while not game.is_game_over():
            if game.current_player == ai_player:
                game.ai_move(ai)
            else:
                moves = game.get_available_moves()
                row, col = moves[rng.integers(len(moves))]
                game.make_move(row, col)

        if game.winner == ai_player:
            wins += 1
        elif game.winner == DRAW:
            draws += 1
        else:
            losses += 1

    win_rate = wins / num_games
    loss_rate = losses / num_games
    draw_rate = draws / num_games

    print(f"Evaluation of {ai_player} against random opponent ({num_games} games):")
    print(f"Win rate: {win_rate:.2f}")
    print(f"Loss rate: {loss_rate:.2f}")
    print(f"Draw rate: {draw_rate:.2f}")

    return win_rate, loss_rate, draw_rate


def plot_move_values(position, ai=None, path=None):
    """Save a heatmap of the minimax value of every empty cell and return its path."""
    import matplotlib.pyplot as plt

    ai = ai or MinimaxAI()
    values = ai.move_values(position)
    path = path or get_plot_path(f"move_values_{ai.player}")

    fig, ax = plt.subplots(figsize=(5, 5))
    cells = position.to_array()
    image = ax.imshow(np.ma.masked_where(cells != 0, values), cmap='RdYlGn',
                      vmin=-ai.win_score, vmax=ai.win_score)
    for row in range(3):
        for col in range(3):
            label = MARK_LABELS.get(int(cells[row, col])) or f"{values[row, col]:+.0f}"
            ax.text(col, row, label, ha='center', va='center', fontsize=18)

    ax.set_xticks(range(3))
    ax.set_yticks(range(3))
    ax.set_title(f"Minimax values for {ai.player}")
    fig.colorbar(image, ax=ax)
    fig.savefig(path)
    plt.close(fig)
    return path
