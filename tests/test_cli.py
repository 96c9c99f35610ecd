"""Tests for the command line."""

from typer.testing import CliRunner

from unorules.cli import app

runner = CliRunner()


def test_play_command() -> None:
    result = runner.invoke(app, ["play", "--agents", "heuristic,random,heuristic", "--seed", "3"])
    assert result.exit_code == 0, result.output
    assert "Winner:" in result.output
    assert "Turns:" in result.output


def test_play_without_stacking() -> None:
    result = runner.invoke(app, ["play", "--agents", "heuristic,heuristic", "--seed", "1", "--no-stacking"])
    assert result.exit_code == 0, result.output


def test_tournament_command() -> None:
    result = runner.invoke(app, ["tournament", "--agents", "heuristic,random", "--games", "3", "--seed", "2"])
    assert result.exit_code == 0, result.output
    assert "Tournament results:" in result.output
    assert "player_0" in result.output


def test_unknown_agent_type() -> None:
    result = runner.invoke(app, ["play", "--agents", "heuristic,robot"])
    assert result.exit_code != 0


def test_needs_two_agents() -> None:
    result = runner.invoke(app, ["play", "--agents", "heuristic"])
    assert result.exit_code != 0
