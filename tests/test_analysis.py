import os

import pytest

from analysis import self_play, evaluate_against_random, plot_move_values, MARK_LABELS
from game import Position, PLAYER_X, PLAYER_O, DRAW
from minimax_ai import MinimaxAI, InvalidCall
from utils import get_plot_path, parse_move


class TestSelfPlay:
    @pytest.mark.parametrize("first", [PLAYER_X, PLAYER_O])
    def test_optimal_play_is_a_draw(self, first):
        moves, winner = self_play(first)
        assert winner == DRAW
        assert len(moves) == 9
        assert len(set(moves)) == 9

    def test_opening_is_first_cell(self):
        moves, _ = self_play(PLAYER_X)
        assert moves[0] == (0, 0)

    def test_deterministic(self):
        assert self_play(PLAYER_O) == self_play(PLAYER_O)


class TestAgainstRandom:
    def test_engine_never_loses(self, capsys):
        win_rate, loss_rate, draw_rate = evaluate_against_random(
            num_games=6, ai_player=PLAYER_O, first_player=PLAYER_X, seed=7)
        assert loss_rate == 0
        assert win_rate + draw_rate == pytest.approx(1.0)
        assert "Loss rate: 0.00" in capsys.readouterr().out

    def test_rejects_zero_games(self):
        with pytest.raises(ValueError):
            evaluate_against_random(num_games=0)

    def test_seeded_runs_repeat(self, capsys):
        first = evaluate_against_random(num_games=4, ai_player=PLAYER_O, seed=3)
        second = evaluate_against_random(num_games=4, ai_player=PLAYER_O, seed=3)
        assert first == second


class TestPlotMoveValues:
    def test_writes_png(self, tmp_path):
        path = plot_move_values(Position.from_string("XOX/OOX/..."),
                                MinimaxAI(PLAYER_X), path=str(tmp_path / "values.png"))
        assert os.path.exists(path)
        assert os.path.getsize(path) > 0

    def test_default_path_uses_plots_dir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = plot_move_values(Position.from_string("O../XX./O.."), MinimaxAI(PLAYER_O))
        assert os.path.basename(path) == "move_values_O.png"
        assert os.path.exists(path)

    def test_labels_read_from_array_encoding(self, tmp_path, monkeypatch):
        calls = []
        original = Position.to_array

        def spy(position):
            calls.append(position.rows())
            return original(position)
        monkeypatch.setattr(Position, "to_array", spy)

        position = Position.from_string("XOX/OOX/...")
        plot_move_values(position, MinimaxAI(PLAYER_X), path=str(tmp_path / "v.png"))
        assert calls == [position.rows()]
        assert [MARK_LABELS.get(int(v)) for v in original(position)[0]] == ["X", "O", "X"]
        assert MARK_LABELS.get(0) is None

    def test_finished_game_rejected(self, tmp_path):
        with pytest.raises(InvalidCall):
            plot_move_values(Position.from_string("XXX/OO./..."), path=str(tmp_path / "x.png"))


class TestUtils:
    def test_plot_path_creates_directory(self, tmp_path):
        target = tmp_path / "plots"
        path = get_plot_path("heat", directory=str(target))
        assert target.is_dir()
        assert path == os.path.join(str(target), "heat.png")

    @pytest.mark.parametrize("text, expected", [
        ("1", (0, 0)),
        ("5", (1, 1)),
        ("9", (2, 2)),
        ("2 0", (2, 0)),
        ("0,2", (0, 2)),
    ])
    def test_parse_move(self, text, expected):
        assert parse_move(text) == expected

    @pytest.mark.parametrize("text", ["0", "10", "a", "1 2 3", ""])
    def test_parse_move_rejects(self, text):
        with pytest.raises(ValueError):
            parse_move(text)
