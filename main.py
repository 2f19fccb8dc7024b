#!/usr/bin/env python3
"""PomoTask entry point.

Run with:
    python main.py
    python -m pomotask
"""

from pomotask.__main__ import main


if __name__ == "__main__":
    main()
