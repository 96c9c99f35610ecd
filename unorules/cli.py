"""CLI entry point."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import typer
from dotenv import load_dotenv

if TYPE_CHECKING:
    from unorules.agent.protocol import AgentProtocol

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO rules engine with bot, LLM and human agents")

AGENTS_HELP = (
    "Comma-separated: heuristic, random, human, llm, or llm:model_name "
    "(e.g. heuristic,human,llm:openai/gpt-4o)"
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_agents(
    agent_specs: str,
    llm_provider: str,
    llm_model: str,
    seed: Optional[int] = None,
) -> dict[str, "AgentProtocol"]:
    from unorules.agents.heuristic_agent import HeuristicAgent
    from unorules.agents.human_agent import HumanAgent
    from unorules.agents.random_agent import RandomAgent

    parts = [s.strip().lower() for s in agent_specs.split(",") if s.strip()]
    agents: dict[str, AgentProtocol] = {}
    for i, part in enumerate(parts):
        pid = f"player_{i}"
        if ":" in part:
            kind, model = part.split(":", 1)
        else:
            kind, model = part, llm_model

        if kind == "heuristic":
            agents[pid] = HeuristicAgent(name=f"Heuristic_{i}")
        elif kind == "random":
            agents[pid] = RandomAgent(name=f"Random_{i}", seed=None if seed is None else seed + i)
        elif kind == "human":
            agents[pid] = HumanAgent(name=f"Human_{i}")
        elif kind == "llm":
            from unorules.agents.llm_agent import LLMAgent

            agents[pid] = LLMAgent(provider=llm_provider, model=model)
        else:
            raise typer.BadParameter(
                f"Unknown agent type: {kind}. Use 'heuristic', 'random', 'human' or 'llm'."
            )
    if len(agents) < 2:
        raise typer.BadParameter("At least 2 agents are required.")
    return agents


@app.command()
def play(
    agents: str = typer.Option("heuristic,heuristic,heuristic,heuristic", "--agents", "-a", help=AGENTS_HELP),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name (e.g. openai/gpt-4o-mini, meta-llama/llama-3-8b-instruct)",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    no_stacking: bool = typer.Option(False, "--no-stacking", help="Disallow stacking draw penalties"),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Logging level"),
) -> None:
    """Run a single UNO game."""
    from unorules.orchestration.game_runner import GameRunner

    _configure_logging(log_level)
    agent_map = _parse_agents(agents, llm_provider, llm_model, seed)
    runner = GameRunner(agent_map, seed=seed, allow_stacking=not no_stacking)
    result = runner.run()
    for line in result.final_state.history[-5:]:
        typer.echo(f"> {line}")
    typer.echo(f"Winner: {result.winner or 'None (draw)'}")
    typer.echo(f"Turns: {result.num_turns}")


@app.command()
def tournament(
    agents: str = typer.Option("heuristic,random", "--agents", "-a", help=AGENTS_HELP),
    games: int = typer.Option(100, "--games", "-g", help="Number of games"),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    no_stacking: bool = typer.Option(False, "--no-stacking", help="Disallow stacking draw penalties"),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Logging level"),
) -> None:
    """Run a tournament."""
    from unorules.orchestration.tournament import run_tournament

    _configure_logging(log_level)
    agent_map = _parse_agents(agents, llm_provider, llm_model, seed)
    wins = run_tournament(agent_map, num_games=games, seed=seed, allow_stacking=not no_stacking)
    typer.echo("Tournament results:")
    for pid in agent_map:
        typer.echo(f"  {pid} ({agent_map[pid].name}): {wins.get(pid, 0)} wins")


if __name__ == "__main__":
    app()
