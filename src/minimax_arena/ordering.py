from __future__ import annotations

import functools
from enum import IntEnum
from typing import Any, Callable

from .outcome import Definite, Draw, Indefinite, Outcome, Player, Win


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1

    def reverse(self) -> Ordering:
        return Ordering(-self.value)


def _cmp(a: int, b: int) -> Ordering:
    if a < b:
        return Ordering.LESS
    if a > b:
        return Ordering.GREATER
    return Ordering.EQUAL


def _greater_if(cond: bool) -> Ordering:
    return Ordering.GREATER if cond else Ordering.LESS


def compare_outcome(player: Player, lhs: Outcome, rhs: Outcome) -> Ordering:
    """
    Rank two outcomes from `player`'s point of view.

    GREATER means `lhs` is the better outcome for `player`. Pairs that are only
    spelled out in one direction are answered by swapping the operands and
    reversing the answer.
    """
    if lhs == rhs:
        return Ordering.EQUAL

    def normalize(score: int) -> int:
        return score if player is Player.FIRST else -score

    if isinstance(lhs, Definite) and isinstance(lhs.result, Win):
        if isinstance(rhs, Definite) and isinstance(rhs.result, Win):
            winners = (lhs.result.player, rhs.result.player)
            if winners == (player, player):
                # win sooner
                return _cmp(lhs.distance, rhs.distance).reverse()
            if winners == (player.other(), player.other()):
                # lose later
                return _cmp(lhs.distance, rhs.distance)
        return _greater_if(lhs.result.player is player)

    if isinstance(lhs, Definite) and isinstance(lhs.result, Draw):
        if isinstance(rhs, Definite) and isinstance(rhs.result, Draw):
            return _cmp(lhs.distance, rhs.distance).reverse()
        if isinstance(rhs, Indefinite):
            return _greater_if(normalize(rhs.score) < 0)

    if isinstance(lhs, Indefinite) and isinstance(rhs, Indefinite):
        return _cmp(normalize(lhs.score), normalize(rhs.score))

    return compare_outcome(player, rhs, lhs).reverse()


def outcome_key(player: Player) -> Callable[[Outcome], Any]:
    """Sort key for outcomes, ascending from worst to best for `player`."""
    return functools.cmp_to_key(lambda a, b: int(compare_outcome(player, a, b)))
