"""
main.py — command-line launcher.

Shuffle the default roster and print the lunch groups:

    python main.py
    python main.py run --csv data/shuffle_lunch_members.csv --group-size 5 --seed 7

Start the HTTP API instead (docs at http://127.0.0.1:8000/docs):

    python main.py serve

All logic lives in shuffle_lunch/cli.py; this file only forwards arguments.
"""

from __future__ import annotations

from shuffle_lunch.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
