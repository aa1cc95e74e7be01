"""Deck construction and shuffling for War."""

import random
from dataclasses import dataclass
from typing import List


MIN_RANK = 2
ACE = 14
JOKER = 15

SUITS_PER_RANK = 4
JOKERS_PER_DECK = 2


@dataclass(frozen=True)
class Card:
    """Immutable playing card (rank only matters for War)."""

    rank: int

    def __str__(self) -> str:
        names = {11: "J", 12: "Q", 13: "K", ACE: "A", JOKER: "Jkr"}
        return names.get(self.rank, str(self.rank))


def build_deck(include_jokers: bool = False) -> List[Card]:
    """Build a rank-ascending deck of 52 cards, or 54 with jokers."""
    deck = [
        Card(rank)
        for rank in range(MIN_RANK, ACE + 1)
        for _ in range(SUITS_PER_RANK)
    ]
    if include_jokers:
        deck.extend(Card(JOKER) for _ in range(JOKERS_PER_DECK))
    return deck


def deck_size(include_jokers: bool = False) -> int:
    """Number of cards build_deck() produces."""
    size = (ACE - MIN_RANK + 1) * SUITS_PER_RANK
    return size + JOKERS_PER_DECK if include_jokers else size


def shuffle_cards(cards: List[Card], rng: random.Random) -> None:
    """Shuffle cards in place (uniform, every permutation equally likely)."""
    rng.shuffle(cards)
