"""Piece catalog: the seven tetromino templates, trimmed once at import"""
from typing import Dict, List

from tetris_shape import Color, Shape, trim

# Drawn in a 4x4 box; trim() strips the dead border.
SHAPES: Dict[str, List[List[int]]] = {
    "L": [[0,0,0,0],
          [0,1,1,1],
          [0,1,0,0],
          [0,0,0,0]],
    "J": [[0,0,0,0],
          [0,1,1,1],
          [0,0,0,1],
          [0,0,0,0]],
    "I": [[0,0,0,0],
          [1,1,1,1],
          [0,0,0,0],
          [0,0,0,0]],
    "T": [[1,1,1,0],
          [0,1,0,0],
          [0,0,0,0],
          [0,0,0,0]],
    "S": [[0,0,0,0],
          [0,1,1,0],
          [1,1,0,0],
          [0,0,0,0]],
    "Z": [[0,0,0,0],
          [1,1,0,0],
          [0,1,1,0],
          [0,0,0,0]],
    "O": [[0,0,0,0],
          [0,1,1,0],
          [0,1,1,0],
          [0,0,0,0]],
}

COLORS: Dict[str, Color] = {
    "L": Color.ORANGE,
    "J": Color.YELLOW,
    "I": Color.BLUE,
    "T": Color.GREEN,
    "S": Color.CYAN,
    "Z": Color.MAGENTA,
    "O": Color.RED,
}

PIECES = list(SHAPES)

TEMPLATES: Dict[str, Shape] = {t: trim(Shape.from_rows(SHAPES[t], COLORS[t])) for t in PIECES}
