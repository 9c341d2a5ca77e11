# src/history_viewer.py
"""
Game History Viewer - look at the saved results without starting the game
"""
import sys
from datetime import datetime
from typing import List, Optional
from models import ResultEntry, Scoreboard, SYMBOLS, TIE
from storage import ResultLog


def format_date(iso: str) -> str:
    """'2025-01-31T18:04:05.123Z' -> '2025-01-31 18:04:05' (local time)"""
    try:
        dt = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    except ValueError:
        return iso
    return dt.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def list_results(log: ResultLog) -> List[ResultEntry]:
    entries = log.read()

    if not entries:
        print("\nNo games recorded yet!")
        return entries

    print("\n" + "=" * 60)
    print("GAME HISTORY".center(60))
    print("=" * 60)
    print(f"{'#':<5} {'Date':<25} {'Result':<20}")
    print("-" * 60)
    for i, entry in enumerate(entries, 1):
        print(f"{i:<5} {format_date(entry.date):<25} {entry.label:<20}")
    print("=" * 60 + "\n")
    return entries


def show_stats(log: ResultLog) -> Scoreboard:
    board = Scoreboard.from_entries(log.read())
    pct = board.percentages()

    print("\n" + "=" * 60)
    print("SCORES".center(60))
    print("=" * 60)
    for sym in SYMBOLS:
        print(f"{sym:<8} {board.wins[sym]:>4} ({pct[sym]}%)")
    print(f"{'Ties':<8} {board.ties:>4} ({pct[TIE]}%)")
    print(f"{'Total':<8} {board.total:>4}")
    print("=" * 60 + "\n")
    return board


def main(argv: Optional[List[str]] = None):
    """Interactive history viewer; `stats` or `list` as argument runs once"""
    argv = sys.argv[1:] if argv is None else argv
    log = ResultLog()

    if argv:
        if argv[0] == "stats":
            show_stats(log)
        elif argv[0] == "list":
            list_results(log)
        else:
            print(f"Unknown command: {argv[0]} (use 'list' or 'stats')")
            return 2
        return 0

    while True:
        print("\n╔════════════════════════════════════╗")
        print("║     TIC TAC TOE HISTORY            ║")
        print("╚════════════════════════════════════╝")
        print("\n1. List all games")
        print("2. Show scores")
        print("3. Clear history")
        print("4. Exit")

        choice = input("\nEnter your choice (1-4): ").strip()

        if choice == "1":
            list_results(log)
        elif choice == "2":
            show_stats(log)
        elif choice == "3":
            if input("Clear all saved games? (y/N): ").strip().lower() == "y":
                log.clear()
                print("History cleared.")
        elif choice == "4":
            print("\nGoodbye!")
            return 0
        else:
            print("\nInvalid choice!")


if __name__ == "__main__":
    sys.exit(main())
