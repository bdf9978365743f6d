"""Piece selectors: NES-style randomizer and a plain uniform one"""
import random
from typing import Optional

import pygame

from tetris_piece import PIECES, TEMPLATES
from tetris_shape import Shape, rotate_clockwise


def _turned(shape: Shape, turns: int) -> Shape:
    for _ in range(turns % 4):
        shape = rotate_clockwise(shape)
    return shape


class NESRandom:
    """32-bit LCG with a single 50% re-roll when a piece repeats.

    With ``pre_rotate`` the chosen template is also given 0-3 clockwise turns.
    """

    def __init__(self, seed: Optional[int] = None, pre_rotate: bool = False):
        if seed is None:
            seed = pygame.time.get_ticks() & 0xFFFFFFFF
        self.state = seed & 0xFFFFFFFF
        self.prev_index: Optional[int] = None
        self.pre_rotate = pre_rotate

    def _lcg_next(self) -> int:
        self.state = (self.state * 0x41C64E6D + 0x3039) & 0xFFFFFFFF
        return self.state

    def _rand(self) -> int:
        return (self._lcg_next() >> 16) & 0x7FFF

    def _rand_choice(self) -> int:
        return self._rand() % len(PIECES)

    def next_piece(self) -> str:
        cand = self._rand_choice()
        if self.prev_index is not None and cand == self.prev_index:
            if (self._rand() & 1) == 1:
                cand = self._rand_choice()
        self.prev_index = cand
        return PIECES[cand]

    def next_template(self) -> Shape:
        shape = TEMPLATES[self.next_piece()]
        if self.pre_rotate:
            shape = _turned(shape, self._rand() & 3)
        return shape


class UniformSelector:
    def __init__(self, seed: Optional[int] = None, pre_rotate: bool = False):
        self.rng = random.Random(seed)
        self.pre_rotate = pre_rotate

    def next_template(self) -> Shape:
        shape = TEMPLATES[self.rng.choice(PIECES)]
        if self.pre_rotate:
            shape = _turned(shape, self.rng.randrange(4))
        return shape
