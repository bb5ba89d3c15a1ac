"""
main.py — Entry point.

Run with:
    python main.py [--board-size 20] [--speed 150] [--color Green] [--seed N]

or, once installed:
    gridsnake [options]

Requires:
    pip install pygame
"""

from gridsnake.cli import main


if __name__ == "__main__":
    main()
