# src/main.py
import pygame
from menu import show_menu
from session_host import SessionHost
from ui import UI
import storage


def main():
    # Load saved preferences and rules
    preferences = storage.load_preferences()
    rules = storage.load_rules()

    host = SessionHost(
        storage.ResultLog(),
        per_move_seconds=rules["per_move_seconds"],
        ai_delay_seconds=rules["ai_delay_seconds"],
    )

    while True:
        # Show menu and get user choices
        settings = show_menu(preferences)

        # User exited menu
        if settings is None:
            break

        # Save preferences for next time
        preferences.update(settings)
        storage.save_preferences(preferences)

        host.new_session(settings["player_symbol"], settings["vs_ai"])
        if UI(host, preferences).run() != "menu":
            break

    pygame.quit()


if __name__ == "__main__":
    main()
