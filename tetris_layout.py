# tetris_layout.py
from dataclasses import dataclass

from tetris_config import Settings


@dataclass
class Dims:
    cell: int
    cols: int
    rows: int
    border: float
    total_w: int
    total_h: int


def compute_dims(settings: Settings) -> Dims:
    cell = settings.block_pixels
    return Dims(
        cell=cell, cols=settings.board_width, rows=settings.board_height,
        border=cell / 20.0,
        total_w=settings.board_width * cell,
        total_h=settings.board_height * cell,
    )
