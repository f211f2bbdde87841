"""
main.py — Bootstrap

1. Load tuning overrides
2. Restore the field roster from disk (or start fresh)
3. Open the window and run the field scene; it writes a final save on exit
"""

from core import tuning
from core.app import App
from core.board import default_board
from core.constants import TILE_SIZE
from core.save import FileStore
from simulation.sessions import SessionManager
from scenes.field_scene import FieldScene, BOARD_OX, BOARD_OY, SIDEBAR_GAP

SIDEBAR_WIDTH = 310


def main():
    tuning.load()

    manager = SessionManager.restore(FileStore())
    board = default_board()
    width = BOARD_OX + board.cols * TILE_SIZE + SIDEBAR_GAP + SIDEBAR_WIDTH
    height = BOARD_OY * 2 + board.rows * TILE_SIZE

    App("Endless Fields", width, height).run(FieldScene(manager))


if __name__ == "__main__":
    main()
