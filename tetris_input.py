"""Key decoding: pygame key presses to logical game commands"""
from typing import Optional

import pygame

from tetris_game import Command

KEYMAP = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE_CCW,
    pygame.K_KP5: Command.ROTATE_CW,
    pygame.K_z: Command.ROTATE_CW,
    pygame.K_r: Command.RESTART,
}


def command_for(event) -> Optional[Command]:
    if event.type != pygame.KEYDOWN:
        return None
    return KEYMAP.get(event.key)
