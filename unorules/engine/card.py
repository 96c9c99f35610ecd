"""Card, CardColor and CardKind types for UNO."""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class CardColor(str, Enum):
    """Card colors. NONE marks a wild card before a color is chosen."""

    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    NONE = "none"


PLAYABLE_COLORS = (CardColor.RED, CardColor.YELLOW, CardColor.GREEN, CardColor.BLUE)


class CardKind(str, Enum):
    """Card kinds."""

    NUMBER = "number"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"


WILD_KINDS = (CardKind.WILD, CardKind.WILD_DRAW_FOUR)
ACTION_KINDS = (CardKind.SKIP, CardKind.REVERSE, CardKind.DRAW_TWO)


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class Card:
    """A UNO card.

    Number cards carry a value 0-9. Action cards carry a color and no value.
    Wild cards always have color NONE; the chosen color lives on the game
    state, never on the card.
    """

    kind: CardKind
    color: CardColor
    value: Optional[int] = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        if self.kind == CardKind.NUMBER:
            if self.value is None or not 0 <= self.value <= 9:
                raise ValueError(f"Number card needs a value 0-9, got {self.value!r}")
        elif self.value is not None:
            raise ValueError(f"{self.kind.value} cards carry no value")
        if self.kind in WILD_KINDS and self.color != CardColor.NONE:
            raise ValueError("Wild cards must have color NONE")
        if self.kind not in WILD_KINDS and self.color == CardColor.NONE:
            raise ValueError("Non-wild cards must have a color")

    @property
    def is_wild(self) -> bool:
        return self.kind in WILD_KINDS

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "type": self.kind.value, "color": self.color.value}
        if self.value is not None:
            data["value"] = self.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Card":
        return cls(
            kind=CardKind(data["type"]),
            color=CardColor(data["color"]),
            value=data.get("value"),
            id=data["id"],
        )

    def __str__(self) -> str:
        if self.is_wild:
            return self.kind.value
        if self.kind == CardKind.NUMBER:
            return f"{self.color.value}_{self.value}"
        return f"{self.color.value}_{self.kind.value}"
