"""War game simulation with a simulated-time cost model."""

import logging
import random
from collections import deque
from typing import Dict, List, Optional, Sequence, Tuple

from warsim.simulation.deck import Card, build_deck, shuffle_cards
from warsim.simulation.state import GameConfig, GameStats, PlayerPiles, Winner

logger = logging.getLogger(__name__)

# Three face down plus one face up
WAR_CARDS = 4


def draw_card(
    player: PlayerPiles, rng: random.Random
) -> Tuple[Optional[Card], bool]:
    """Take the next card from a player's draw pile.

    An empty draw pile is refilled from the winnings pile, which is shuffled
    first. Returns (None, False) when the player has no cards at all.

    Returns:
        (card, reshuffled) tuple
    """
    if player.draw_pile:
        return player.draw_pile.popleft(), False

    if not player.winnings_pile:
        return None, False

    cards = player.winnings_pile
    player.winnings_pile = []
    shuffle_cards(cards, rng)
    player.draw_pile = deque(cards)
    return player.draw_pile.popleft(), True


class WarGame:
    """Two-player War with hand and shuffle time accounting.

    Each instance owns its piles, statistics and random source, so games
    never share state.
    """

    def __init__(
        self,
        config: GameConfig,
        rng: random.Random,
        hands: Optional[Tuple[Sequence[Card], Sequence[Card]]] = None,
    ) -> None:
        """Initialize game, dealing a shuffled deck unless hands are given.

        Args:
            config: Rules and time costs
            rng: Random source for the initial deal and every reshuffle
            hands: Explicit (player A, player B) draw piles, front first
        """
        self.config = config
        self.rng = rng

        if hands is None:
            deck = build_deck(config.include_jokers)
            shuffle_cards(deck, rng)
            half = len(deck) // 2
            hands = (deck[:half], deck[half:])

        self.player_a = PlayerPiles(draw_pile=deque(hands[0]))
        self.player_b = PlayerPiles(draw_pile=deque(hands[1]))
        self._players: Dict[Winner, PlayerPiles] = {
            Winner.A: self.player_a,
            Winner.B: self.player_b,
        }
        self.elapsed_ms = 0
        self.stats = GameStats()

    @classmethod
    def from_hands(
        cls,
        config: GameConfig,
        rng: random.Random,
        hand_a: Sequence[Card],
        hand_b: Sequence[Card],
    ) -> "WarGame":
        """Start a game from fixed hands instead of a dealt deck."""
        return cls(config, rng, hands=(hand_a, hand_b))

    @property
    def total_cards(self) -> int:
        """Cards held by both players (excludes a war pile in flight)."""
        return self.player_a.total + self.player_b.total

    def is_game_over(self) -> bool:
        """Check if either player is out of cards."""
        return self.player_a.is_empty or self.player_b.is_empty

    def can_play_trick(self) -> bool:
        """Check whether another trick fits within every ceiling."""
        if self.is_game_over():
            return False
        if self.stats.tricks >= self.config.max_tricks:
            return False
        budget = self.config.max_game_time_ms
        return (
            self.elapsed_ms < budget
            and self.elapsed_ms + self.config.hand_time_ms <= budget
        )

    def play_trick(self) -> None:
        """Play one trick, resolving a war if the cards tie."""
        if self.is_game_over():
            return

        self.stats.tricks += 1
        self.elapsed_ms += self.config.hand_time_ms

        card_a = self._draw(Winner.A)
        card_b = self._draw(Winner.B)
        assert card_a is not None and card_b is not None

        if card_a.rank == card_b.rank:
            war_pile = [card_a, card_b]
            winner = self.resolve_war(war_pile, depth=1)
            self._award(winner, war_pile)
        elif card_a.rank > card_b.rank:
            self._award(Winner.A, [card_a, card_b])
        else:
            self._award(Winner.B, [card_a, card_b])

    def resolve_war(self, war_pile: List[Card], depth: int) -> Winner:
        """Resolve a tie, recursing on further ties.

        Every card committed at any depth is appended to war_pile; the
        caller hands the whole pile to the returned winner.

        Args:
            war_pile: Cards at stake so far (mutated)
            depth: 1 for the first war of a trick, +1 per deep war

        Returns:
            Player who takes the war pile
        """
        self.stats.wars += 1
        self.stats.total_war_depth += depth
        self.elapsed_ms += self.config.hand_time_ms

        if self.elapsed_ms >= self.config.max_game_time_ms:
            # Out of time: the player holding more cards takes the pile
            logger.debug(f"War at depth {depth} cut short at {self.elapsed_ms} ms")
            return self._leader()

        cards_a = self._draw_for_war(Winner.A)
        cards_b = self._draw_for_war(Winner.B)
        war_pile.extend(cards_a)
        war_pile.extend(cards_b)

        if not cards_a:
            return Winner.B
        if not cards_b:
            return Winner.A

        # Last card drawn is face up; the rest were face down
        up_a, up_b = cards_a[-1], cards_b[-1]
        if up_a.rank > up_b.rank:
            return Winner.A
        if up_b.rank > up_a.rank:
            return Winner.B

        self.stats.deep_wars += 1
        if self.player_a.is_empty:
            return Winner.B
        if self.player_b.is_empty:
            return Winner.A
        return self.resolve_war(war_pile, depth + 1)

    def play(self) -> GameStats:
        """Play tricks until a player runs out or a ceiling is hit."""
        while self.can_play_trick():
            self.play_trick()
        return self._finish()

    def _draw(self, who: Winner) -> Optional[Card]:
        """Draw for a player, charging and counting any reshuffle."""
        card, reshuffled = draw_card(self._players[who], self.rng)
        if reshuffled:
            self.elapsed_ms += self.config.shuffle_time_ms
            if who is Winner.A:
                self.stats.shuffles_a += 1
            else:
                self.stats.shuffles_b += 1
        return card

    def _draw_for_war(self, who: Winner) -> List[Card]:
        cards: List[Card] = []
        for _ in range(WAR_CARDS):
            card = self._draw(who)
            if card is None:
                break
            cards.append(card)
        return cards

    def _award(self, winner: Winner, cards: List[Card]) -> None:
        self._players[winner].winnings_pile.extend(cards)
        if winner is Winner.A:
            self.stats.trick_wins_a += 1
        else:
            self.stats.trick_wins_b += 1

    def _leader(self) -> Winner:
        """Player with more cards; A on a tie."""
        if self.player_a.total >= self.player_b.total:
            return Winner.A
        return Winner.B

    def _finish(self) -> GameStats:
        stats = self.stats
        stats.duration_ms = self.elapsed_ms
        stats.finished = self.is_game_over()

        if stats.finished:
            stats.winner = Winner.B if self.player_a.is_empty else Winner.A
            logger.debug(
                f"Game over after {stats.tricks} tricks: {stats.winner.value} wins "
                f"({stats.wars} wars, {stats.deep_wars} deep)"
            )
        else:
            logger.warning(
                f"Game exceeded {self.config.max_tricks} tricks or "
                f"{self.config.max_game_time_ms} ms. Possible infinite game."
            )
            logger.warning(
                f"Final state: player A: {self.player_a.total} cards, "
                f"player B: {self.player_b.total} cards"
            )
        return stats


def play_war_game(config: GameConfig, rng: random.Random) -> GameStats:
    """Play a complete War game and return its statistics."""
    return WarGame(config, rng).play()
