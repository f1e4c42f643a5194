import argparse
import logging

from analysis import self_play, plot_move_values
from config import CONFIG
from game import TicTacToe, DRAW, other_player
from minimax_ai import MinimaxAI
from utils import parse_move


def build_parser():
    parser = argparse.ArgumentParser(description="Play tic-tac-toe against an exhaustive minimax engine.")
    parser.add_argument("--ai-player", choices=["X", "O"], default=CONFIG.search.ai_player,
                        help="mark the engine plays")
    parser.add_argument("--human-first", action=argparse.BooleanOptionalAction,
                        default=CONFIG.play.human_first, help="let the human open the game")
    parser.add_argument("--self-play", action="store_true", help="engine plays both sides")
    parser.add_argument("--hint", action="store_true", help="show the engine's suggestion before each human move")
    parser.add_argument("--plot", action="store_true", help="save a heatmap of move values before each engine move")
    return parser


def announce(game, ai_player):
    if game.winner == DRAW:
        print("It's a Tie!")
    elif game.winner == ai_player:
        print("AI Wins!")
    else:
        print("You Win!")


def play_interactive(args):
    ai = MinimaxAI(args.ai_player, win_score=CONFIG.search.win_score)
    human = other_player(args.ai_player)
    helper = MinimaxAI(human, win_score=CONFIG.search.win_score)
    game = TicTacToe(first_player=human if args.human_first else args.ai_player)

    print(f"You are {human}, the engine is {args.ai_player}.")
    print("Enter a cell as 1-9 or 'row col', 'u' to undo.")

    while not game.is_game_over():
        print(game.position)
        print()

        if game.current_player == args.ai_player:
            if args.plot:
                print(f"Move values saved to {plot_move_values(game.position, ai)}")
            row, col = game.ai_move(ai)
            print(f"AI plays: {row} {col}")
            continue

        if args.hint:
            print(f"Hint: {helper.find_best_move(game.position)}")
        try:
            text = input(f"Your move ({human}): ").strip()
        except EOFError:
            print("\nGame abandoned")
            return None

        if text.lower() == "u":
            # Take back the engine's reply and the human's move
            game.undo()
            game.undo()
            continue
        try:
            row, col = parse_move(text)
        except ValueError as e:
            print(f"Invalid input: {e}")
            continue
        if not game.make_move(row, col):
            print("Illegal move, try again.")

    print(game.position)
    announce(game, args.ai_player)
    return game.winner


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=CONFIG.log_level)

    if args.self_play:
        first = other_player(args.ai_player) if args.human_first else args.ai_player
        moves, winner = self_play(first)
        print(f"Self-play from {first}: {' '.join(f'{r}{c}' for r, c in moves)}")
        print(f"Result: {winner}")
        return winner

    return play_interactive(args)


if __name__ == "__main__":
    main()
