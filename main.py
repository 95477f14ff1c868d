"""
main.py - Entry point.

Run with:
    python main.py

Requires:
    pip install pygame
"""

import logging

from minigames.config import LOG_LEVEL
from minigames.controller import ArcadeController


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ArcadeController().run()


if __name__ == "__main__":
    main()
