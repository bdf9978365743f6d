import logging
import sys

import pygame

from tetris_config import load_settings
from tetris_game import Game
from tetris_input import command_for
from tetris_layout import compute_dims
from tetris_render import RenderAssets

log = logging.getLogger(__name__)


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    settings = load_settings()

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN])

    dims = compute_dims(settings)
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetris")

    render = RenderAssets(dims)
    clock = pygame.time.Clock()
    game = Game(settings)
    log.info("board %dx%d, fall every %d ms", settings.board_width, settings.board_height,
             settings.fall_interval_ms)

    while True:
        clock.tick(60)
        game.tick()

        for e in pygame.event.get():
            if e.type == pygame.QUIT or (e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE):
                pygame.quit(); sys.exit()
            cmd = command_for(e)
            if cmd is not None:
                game.handle(cmd)

        render.draw(screen, game.snapshot())
        pygame.display.flip()


if __name__ == '__main__':
    main()
