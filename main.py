"""
main.py — Entry point.

Run with:
    python main.py

Requires:
    pip install pygame
"""

import logging

from gridsnake.config import STORE_PATH
from gridsnake.controller import GameController
from gridsnake.storage import JsonFileStore


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    GameController(store=JsonFileStore(STORE_PATH)).run()


if __name__ == "__main__":
    main()
