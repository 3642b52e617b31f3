from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class Item:
    id: int
    name: str
    recyclable: bool
    info: str
    icon: str = "♻️"


ITEMS = (
    Item(1, "Plastic water bottle", True,
         "PET bottles are accepted almost everywhere. Empty them and put the cap back on.", "🧴"),
    Item(2, "Greasy pizza box", False,
         "Grease and cheese contaminate the cardboard fibres. Compost it or tear off the clean lid.", "🍕"),
    Item(3, "Aluminium can", True,
         "Aluminium can be recycled endlessly without losing quality.", "🥫"),
    Item(4, "Styrofoam cup", False,
         "Expanded polystyrene is rarely accepted curbside and breaks into tiny pieces.", "🥤"),
    Item(5, "Glass jar", True,
         "Rinse it out; glass is melted down and reformed into new containers.", "🫙"),
    Item(6, "Plastic grocery bag", False,
         "Film plastic jams sorting machines. Return bags to a store drop-off instead.", "🛍️"),
    Item(7, "Newspaper", True,
         "Clean paper is pulped and turned into new paper products.", "📰"),
    Item(8, "Used paper napkin", False,
         "Soiled paper fibres are too short and dirty to recycle, but they can be composted.", "🧻"),
    Item(9, "Cardboard shipping box", True,
         "Flatten it and remove tape; corrugated cardboard is highly recyclable.", "📦"),
    Item(10, "Broken drinking glass", False,
         "Drinking glass melts at a different temperature than bottle glass. Wrap it and bin it.", "🍷"),
)


@dataclass(frozen=True)
class GameState:
    index: int = 0
    score: int = 0
    guesses: Tuple[bool, ...] = ()


def is_finished(state: GameState, items: Sequence[Item] = ITEMS) -> bool:
    return state.index >= len(items)


def current_item(state: GameState, items: Sequence[Item] = ITEMS) -> Optional[Item]:
    if is_finished(state, items):
        return None
    return items[state.index]


def guess(state: GameState, items: Sequence[Item], answer: bool) -> GameState:
    item = current_item(state, items)
    if item is None:
        return state
    correct = item.recyclable == answer
    return GameState(
        index=state.index + 1,
        score=state.score + (1 if correct else 0),
        guesses=state.guesses + (answer,),
    )


def last_feedback(state: GameState, items: Sequence[Item] = ITEMS):
    """(item, was_correct) for the most recent guess, or None before the first one."""
    if not state.guesses:
        return None
    item = items[len(state.guesses) - 1]
    return item, item.recyclable == state.guesses[-1]
