"""Human agent - reads moves from terminal."""

from unorules.engine import Challenge, DrawCard, Move, PassTurn, PlayCard, PlayerView


def describe_move(move: Move) -> str:
    if isinstance(move, DrawCard):
        return "DRAW"
    if isinstance(move, PassTurn):
        return "PASS"
    if isinstance(move, Challenge):
        return "CHALLENGE the Wild Draw Four"
    if isinstance(move, PlayCard):
        extra = f" (choose color: {move.chosen_color.value})" if move.chosen_color else ""
        uno = " + UNO!" if move.called_uno else ""
        return f"PLAY {move.card}{extra}{uno}"
    return f"CALL OUT {move.target_player_id}"


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_move(
        self,
        player_view: PlayerView,
        legal_moves: list[Move],
        player_id: str,
    ) -> Move | None:
        if not legal_moves:
            return None

        print("\n--- Your turn ---")
        print("Your hand:", " ".join(str(c) for c in player_view.my_hand))
        print("Top discard:", player_view.top_discard)
        print("Color to match:", player_view.current_color.value)
        if player_view.pending_draw_count:
            print("Pending draws:", player_view.pending_draw_count)
        print("\nLegal moves:")
        for i, move in enumerate(legal_moves):
            print(f"  {i}: {describe_move(move)}")

        while True:
            try:
                raw = input("Enter number: ").strip()
                idx = int(raw)
                if 0 <= idx < len(legal_moves):
                    return legal_moves[idx]
            except ValueError:
                pass
            except EOFError:
                return None
            print("Invalid. Try again.")

    def get_interjection(self, player_view: PlayerView, player_id: str) -> Move | None:
        return None
