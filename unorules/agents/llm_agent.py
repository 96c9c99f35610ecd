"""LLM agent using OpenAI library with OpenRouter, Groq, Ollama or Hugging Face."""

import json
import logging
import os
import re
import time
from typing import Optional

from openai import OpenAI

from unorules.agents.human_agent import describe_move
from unorules.engine import DrawCard, Move, PassTurn, PlayDirection, PlayerView

logger = logging.getLogger(__name__)

OPENROUTER_BASE = "https://openrouter.ai/api/v1"
GROQ_BASE = "https://api.groq.com/openai/v1"
OLLAMA_BASE = "http://localhost:11434/v1"
HUGGINGFACE_BASE = "https://router.huggingface.co/v1"


def _format_player_view(pv: PlayerView, player_id: str) -> str:
    """Format player view as text for the LLM."""
    lines = [
        "=== Your hand ===",
        " ".join(str(c) for c in pv.my_hand),
        "",
        "=== Top card on discard ===",
        str(pv.top_discard) if pv.top_discard else "None",
        "",
        "=== Current color to match ===",
        pv.current_color.value.upper(),
        "",
        "=== Other players' card counts ===",
    ]
    for pid, count in pv.num_cards_per_player.items():
        if pid != player_id:
            lines.append(f"  {pid}: {count} cards")
    lines.extend([
        "",
        "=== Direction ===",
        "clockwise" if pv.play_direction == PlayDirection.CLOCKWISE else "counter-clockwise",
        "",
        "=== Pending draw penalty (yours unless you stack or challenge) ===",
        str(pv.pending_draw_count),
        "",
        "=== Game History (last 10 events) ===",
    ])
    if pv.history:
        lines.extend(f"- {h}" for h in pv.history)
    else:
        lines.append("No history yet.")
    return "\n".join(lines)


def _format_legal_moves(moves: list[Move]) -> str:
    return "\n".join(f"{i}: {describe_move(m)}" for i, m in enumerate(moves))


def _pick(idx: int, moves: list[Move]) -> Move | None:
    if 0 <= idx < len(moves):
        return moves[idx]
    logger.debug("Index %d out of range (0-%d)", idx, len(moves) - 1)
    return None


def _parse_move_response(response: str, moves: list[Move]) -> Move | None:
    """Parse LLM response into a Move."""
    # 1. A JSON-like object, strict first, then with single quotes fixed up
    json_match = re.search(r"(\{.*?\})", response, re.DOTALL)
    if json_match:
        json_str = json_match.group(1)
        for candidate in (json_str, json_str.replace("'", '"')):
            try:
                data = json.loads(candidate)
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict) and isinstance(data.get("move_index"), int):
                move = _pick(data["move_index"], moves)
                if move is not None:
                    return move
            break

    # 2. "move_index": N with any quoting
    match = re.search(r"[\"']?move_index[\"']?\s*:\s*(\d+)", response, re.IGNORECASE)
    if match:
        move = _pick(int(match.group(1)), moves)
        if move is not None:
            return move

    # 3. Literal DRAW / PASS
    upper = response.upper()
    for word, move_type in (("DRAW", DrawCard), ("PASS", PassTurn)):
        if word in upper:
            for m in moves:
                if isinstance(m, move_type):
                    return m

    # 4. Last resort: a standalone number
    cleaned_response = re.sub(r"[{}\[\]\"'.,:]", " ", response)
    for word in cleaned_response.split():
        if word.isdigit():
            move = _pick(int(word), moves)
            if move is not None:
                return move

    return None


class LLMAgent:
    """Agent that uses an LLM to choose moves."""

    def __init__(
        self,
        provider: str = "openrouter",
        model: str = "openai/gpt-4o-mini",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        rate_limit: Optional[float] = None,
        max_attempts: int = 3,
    ):
        if provider == "openrouter":
            base_url = OPENROUTER_BASE
            key = api_key or os.environ.get("OPENROUTER_API_KEY")
        elif provider == "groq":
            base_url = GROQ_BASE
            key = api_key or os.environ.get("GROQ_API_KEY")
        elif provider == "ollama":
            base_url = os.environ.get("OLLAMA_BASE_URL", OLLAMA_BASE)
            key = "ollama"
        elif provider == "huggingface":
            base_url = HUGGINGFACE_BASE
            key = api_key or os.environ.get("HUGGINGFACE_API_KEY")
        else:
            raise ValueError(f"Unknown provider: {provider}")

        if not key:
            raise ValueError(f"API key required for {provider}. Set {provider.upper()}_API_KEY or pass api_key.")

        self._client = OpenAI(api_key=key, base_url=base_url)
        self._model = model
        self._timeout = timeout
        self._provider = provider
        self._rate_limit = rate_limit  # Requests per minute
        self._max_attempts = max_attempts
        self._request_history: list[float] = []

        logger.info(
            "[%s] provider=%s base_url=%s timeout=%ss rate_limit=%s rpm",
            self.name, provider, base_url, timeout, rate_limit or "None",
        )

    @property
    def name(self) -> str:
        return f"llm-{self._model}"

    def _wait_for_rate_limit(self) -> None:
        """Block if rate limit is exceeded."""
        if not self._rate_limit:
            return

        now = time.time()
        self._request_history = [t for t in self._request_history if now - t < 60.0]

        if len(self._request_history) >= self._rate_limit:
            wait_time = 60.0 - (now - self._request_history[0])
            if wait_time > 0:
                logger.info("[%s] Rate limit reached, waiting %.2fs", self.name, wait_time)
                time.sleep(wait_time)

        self._request_history.append(time.time())

    def _build_prompt(self, player_view: PlayerView, legal_moves: list[Move], player_id: str) -> str:
        return f"""You are playing UNO.
Objective: Win by playing all your cards. Match the top discard card by color (Red, Blue, Green, Yellow) or value (0-9, Skip, Reverse, Draw Two). Wild cards can be played on anything.
A pending draw penalty can only be passed on by stacking the same kind of card; otherwise you draw it.
After a voluntary draw you may only play the drawn card or pass.

{_format_player_view(player_view, player_id)}

=== Legal moves ===
{_format_legal_moves(legal_moves)}

INSTRUCTIONS:
Select the best move to win the game.
Respond with a JSON object containing the index of your chosen move.
Example: {{"move_index": 2}}
"""

    def get_move(
        self,
        player_view: PlayerView,
        legal_moves: list[Move],
        player_id: str,
    ) -> Move | None:
        if not legal_moves:
            return None

        prompt = self._build_prompt(player_view, legal_moves, player_id)

        for attempt in range(1, self._max_attempts + 1):
            start_time = time.time()
            try:
                self._wait_for_rate_limit()

                kwargs = {
                    "model": self._model,
                    "messages": [{"role": "user", "content": prompt}],
                    "timeout": self._timeout,
                }
                # JSON mode only where the provider is known to support it
                if "gpt-4" in self._model or "gpt-3.5" in self._model or self._provider == "groq":
                    kwargs["response_format"] = {"type": "json_object"}

                logger.debug("[%s] Attempt %d: sending request to %s", self.name, attempt, self._provider)
                resp = self._client.chat.completions.create(**kwargs)
                content = resp.choices[0].message.content or ""
                logger.debug("[%s] Response in %.2fs", self.name, time.time() - start_time)
            except Exception as e:
                logger.warning(
                    "[%s] Error on attempt %d after %.2fs: %s: %s",
                    self.name, attempt, time.time() - start_time, type(e).__name__, e,
                )
                continue

            move = _parse_move_response(content, legal_moves)
            if move is not None:
                return move
            logger.warning("[%s] Could not parse a move from response: %r", self.name, content)

        logger.warning("[%s] All attempts failed, falling back to draw/pass", self.name)
        for m in legal_moves:
            if isinstance(m, (DrawCard, PassTurn)):
                return m
        return legal_moves[0]

    def get_interjection(self, player_view: PlayerView, player_id: str) -> Move | None:
        return None
