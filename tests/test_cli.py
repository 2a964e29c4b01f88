"""Unit tests for gridfour/interfaces/cli.py

The console is replaced by a scripted input function and a list that
collects every printed line.
"""

from typing import Callable, List, Tuple

import pytest

from gridfour.interfaces import cli
from gridfour.interfaces.cli import (PlayerProfile, TurnController, TurnState,
                                     get_player_name, run_game)
from gridfour.utils import Cell, GameResult, Player


class ScriptedConsole:
    """Feeds prepared lines to input() and records prompts and output."""

    def __init__(self, lines: List[str]):
        self.lines = list(lines)
        self.prompts: List[str] = []
        self.output: List[str] = []

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    def print(self, text: str) -> None:
        self.output.append(text)


@pytest.fixture
def console_factory() -> Callable[[List[str]], ScriptedConsole]:
    return ScriptedConsole


@pytest.fixture
def profiles() -> List[PlayerProfile]:
    return [PlayerProfile(Player.ONE, "Alice"), PlayerProfile(Player.TWO, "Bob")]


def make_controller(profiles, console: ScriptedConsole, rows: int = 5, cols: int = 5) -> TurnController:
    return TurnController(profiles, rows, cols, input_fn=console.input, output_fn=console.print)


def interleave(first: List[Tuple[int, int]], second: List[Tuple[int, int]]) -> List[str]:
    lines = []
    for i, (row, col) in enumerate(first):
        lines.append(f"{row} {col}")
        if i < len(second):
            lines.append(f"{second[i][0]} {second[i][1]}")
    return lines


# -- NAMES ---
def test_get_player_name_accepts_valid_name(console_factory) -> None:
    console = console_factory(["Alice"])
    assert get_player_name(Player.ONE, console.input, console.print) == "Alice"
    assert console.prompts == ["Enter Player 1's name:"]
    assert console.output == []


def test_get_player_name_reprompts_until_valid(console_factory) -> None:
    console = console_factory(["Al1ce", "Bob Smith", "Bob"])
    assert get_player_name(Player.TWO, console.input, console.print) == "Bob"
    assert console.prompts == ["Enter Player 2's name:"] * 3
    assert console.output == [cli.INVALID_NAME] * 2


def test_get_player_name_accepts_empty_name(console_factory) -> None:
    console = console_factory([""])
    assert get_player_name(Player.ONE, console.input, console.print) == ""


# -- TURN CONTROLLER ---
def test_controller_requires_both_profiles(console_factory) -> None:
    console = console_factory([])
    with pytest.raises(ValueError):
        make_controller([PlayerProfile(Player.ONE, "Alice")], console)


def test_turn_prompts_current_player_after_board(console_factory, profiles) -> None:
    console = console_factory(["2 2"])
    controller = make_controller(profiles, console)

    assert controller.play_turn() == TurnState.AWAITING_MOVE
    assert console.prompts == ["Alice, enter your move (row col):"]
    assert console.output == [
        "   |   |   |   |   |",
        "--------------------",
    ] * 4 + ["   |   |   |   |   |"]
    assert controller.game.board.cell(2, 2) == Cell.O
    assert controller.current_profile().name == "Bob"


def test_malformed_input_is_reported_and_retried(console_factory, profiles) -> None:
    console = console_factory(["hello", "1", "1 2 3", "1 x", "1 1"])
    controller = make_controller(profiles, console)

    for _ in range(4):
        assert controller.play_turn() == TurnState.AWAITING_MOVE
        assert console.output[-1] == cli.INVALID_INPUT
        assert controller.current_profile().name == "Alice"

    controller.play_turn()
    assert controller.game.board.cell(1, 1) == Cell.O
    assert controller.current_profile().name == "Bob"


@pytest.mark.parametrize("text", ["0_0 1", "+1 2", "１ 2"])
def test_non_plain_integers_are_invalid_input(console_factory, profiles, text: str) -> None:
    console = console_factory([text])
    controller = make_controller(profiles, console)

    controller.play_turn()
    assert console.output[-1] == cli.INVALID_INPUT
    assert controller.game.moves_made == []


def test_invalid_move_keeps_same_player_and_board(console_factory, profiles) -> None:
    console = console_factory(["0 0", "0 0", "5 1", "-1 0", "0 1"])
    controller = make_controller(profiles, console)

    controller.play_turn()
    board_after_first = controller.game.board.copy()
    for _ in range(3):
        controller.play_turn()
        assert console.output[-1] == cli.INVALID_MOVE
        assert controller.game.board == board_after_first
        assert console.prompts[-1] == "Bob, enter your move (row col):"

    controller.play_turn()
    assert controller.game.board.cell(0, 1) == Cell.C


def test_player_one_wins(console_factory, profiles) -> None:
    lines = interleave([(0, 0), (0, 1), (0, 2), (0, 3)], [(4, 0), (4, 1), (4, 2)])
    console = console_factory(lines)
    controller = make_controller(profiles, console)

    assert controller.play() == GameResult.PLAYER_ONE_WIN
    assert controller.state == TurnState.WON
    assert console.output[-1] == "Alice wins!"
    # final board shown right before the announcement
    assert console.output[-2] == " C | C | C |   |   |"
    assert console.output[-10] == " O | O | O | O |   |"
    assert console.lines == []


def test_player_two_wins_in_column(console_factory, profiles) -> None:
    lines = interleave([(0, 0), (1, 0), (2, 1), (3, 1)], [(0, 4), (1, 4), (2, 4), (3, 4)])
    console = console_factory(lines)
    controller = make_controller(profiles, console)

    assert controller.play() == GameResult.PLAYER_TWO_WIN
    assert console.output[-1] == "Bob wins!"


def test_full_board_is_a_draw(console_factory, profiles) -> None:
    console = console_factory(["0 0", "0 1", "1 1", "1 0"])
    controller = make_controller(profiles, console, rows=2, cols=2)

    assert controller.play() == GameResult.DRAW
    assert controller.state == TurnState.DRAWN
    assert console.output[-1] == cli.DRAW
    assert console.output[-4:-1] == [" O | C |", "--------", " C | O |"]


# -- SESSION ---
def test_run_game_full_session(console_factory) -> None:
    lines = ["Al1ce", "Alice", "Bob"] + interleave(
        [(0, 0), (1, 0), (2, 0), (3, 0)], [(0, 1), (1, 1), (2, 1)])
    console = console_factory(lines)

    result = run_game(input_fn=console.input, output_fn=console.print)

    assert result == GameResult.PLAYER_ONE_WIN
    assert console.output[0] == "Welcome to Connect 4 (5x5 grid)"
    assert console.output[1] == cli.INSTRUCTIONS
    assert console.output[2] == cli.INVALID_NAME
    assert console.prompts[:3] == ["Enter Player 1's name:"] * 2 + ["Enter Player 2's name:"]
    assert console.output[-1] == "Alice wins!"


def test_main_reports_aborted_game(monkeypatch, capsys) -> None:
    def no_more_input(prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr("builtins.input", no_more_input)
    assert cli.main(["--rows", "3", "--cols", "4"]) == 1

    out = capsys.readouterr().out
    assert "Welcome to Connect 4 (3x4 grid)" in out
    assert "Game aborted." in out


def test_main_rejects_non_positive_size(capsys) -> None:
    with pytest.raises(SystemExit):
        cli.main(["--rows", "0"])
