"""Simulate a game with random agents and print its history."""

from unorules.agents.random_agent import RandomAgent
from unorules.orchestration.game_runner import GameRunner


def main():
    agents = {
        "p1": RandomAgent("Bot1", seed=1),
        "p2": RandomAgent("Bot2", seed=2),
        "p3": RandomAgent("Bot3", seed=3),
        "p4": RandomAgent("Bot4", seed=4),
    }

    runner = GameRunner(agents, seed=42)
    result = runner.run()

    for event in result.final_state.history:
        print(f"> {event}")
    print(f"Game finished! Winner: {result.winner}")
    print(f"Turns: {result.num_turns}")
    print(f"Cards accounted for: {result.final_state.card_count()}")


if __name__ == "__main__":
    main()
