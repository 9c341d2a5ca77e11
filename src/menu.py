# src/menu.py
from __future__ import annotations
import pygame
from typing import Optional, Callable, List, Tuple, Dict, Any
from dataclasses import dataclass
from enum import Enum
from theme_manager import get_theme_manager, ThemeConfig

# Colors (fallback)
BLACK = (30, 30, 30)
GRAY = (90, 90, 90)
LIGHT_GRAY = (180, 180, 180)
RED = (200, 70, 70)


class MenuState(Enum):
    MAIN = "main"
    RULES = "rules"


@dataclass
class Button:
    text: str
    x: int
    y: int
    width: int
    height: int
    action: Optional[Callable] = None
    color: Tuple[int, int, int] = (220, 170, 60)
    hover_color: Tuple[int, int, int] = (255, 200, 80)
    text_color: Tuple[int, int, int] = BLACK
    enabled: bool = True

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, self.width, self.height)

    def is_hovered(self, mouse_pos: Tuple[int, int]) -> bool:
        mx, my = mouse_pos
        return (self.x <= mx <= self.x + self.width and
                self.y <= my <= self.y + self.height)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font, mouse_pos: Tuple[int, int]):
        color = self.hover_color if self.is_hovered(mouse_pos) and self.enabled else self.color
        if not self.enabled:
            color = GRAY

        # Button background with shadow effect
        shadow_offset = 4
        pygame.draw.rect(screen, (50, 50, 50),
                         (self.x + shadow_offset, self.y + shadow_offset, self.width, self.height),
                         border_radius=10)
        pygame.draw.rect(screen, color, self.rect, border_radius=10)
        pygame.draw.rect(screen, BLACK, self.rect, 2, border_radius=10)

        text_surf = font.render(self.text, True, self.text_color if self.enabled else LIGHT_GRAY)
        screen.blit(text_surf, text_surf.get_rect(center=self.rect.center))


class Menu:
    """Symbol selection screen: pick X or O, toggle the AI, switch theme."""

    def __init__(self, preferences: Dict[str, Any], width: int = 900, height: int = 640):
        pygame.init()
        self.W, self.H = width, height
        self.screen = pygame.display.set_mode((self.W, self.H))
        pygame.display.set_caption("Tic Tac Toe - Menu")
        self.clock = pygame.time.Clock()

        self.font_title = pygame.font.SysFont("segoeui", 64, bold=True)
        self.font_subtitle = pygame.font.SysFont("segoeui", 28, bold=True)
        self.font_normal = pygame.font.SysFont("segoeui", 24)
        self.font_small = pygame.font.SysFont("segoeui", 18)

        self.state = MenuState.MAIN
        self.running = True
        self.result: Optional[Dict[str, Any]] = None

        self.theme_manager = get_theme_manager()
        theme_name = preferences.get("theme", "light")
        if not self.theme_manager.set_current_theme(theme_name):
            theme_name = self.theme_manager.current_theme_name

        self.settings = {
            "player_symbol": preferences.get("player_symbol", "X"),
            "vs_ai": bool(preferences.get("vs_ai", True)),
            "theme": theme_name,
        }

        self.buttons: Dict[MenuState, List[Button]] = {}
        self._init_buttons()

        # exit confirming
        self._confirming_exit = False
        self._exit_yes_btn: Optional[Button] = None
        self._exit_no_btn: Optional[Button] = None

    def _get_current_theme(self) -> ThemeConfig:
        return self.theme_manager.get_current_theme()

    def _init_buttons(self):
        theme = self._get_current_theme()
        center_x = self.W // 2
        sym_w, sym_h = 140, 90
        btn_w, btn_h = 340, 54
        self.buttons[MenuState.MAIN] = [
            Button("X", center_x - sym_w - 20, 230, sym_w, sym_h,
                   lambda: self._choose_symbol("X"),
                   color=theme.background_color, hover_color=theme.highlight_color,
                   text_color=theme.piece_x_color),
            Button("O", center_x + 20, 230, sym_w, sym_h,
                   lambda: self._choose_symbol("O"),
                   color=theme.background_color, hover_color=theme.highlight_color,
                   text_color=theme.piece_o_color),
            Button(self._ai_label(), center_x - btn_w // 2, 360, btn_w, btn_h,
                   self._toggle_ai,
                   color=theme.background_color, hover_color=theme.highlight_color,
                   text_color=theme.text_color),
            Button(self._theme_label(), center_x - btn_w // 2, 430, btn_w, btn_h,
                   self._switch_theme,
                   color=theme.background_color, hover_color=theme.highlight_color,
                   text_color=theme.text_color),
            Button("Rules", center_x - btn_w // 2, 500, btn_w, btn_h,
                   lambda: self._change_state(MenuState.RULES),
                   color=GRAY, hover_color=LIGHT_GRAY, text_color=BLACK),
        ]
        self.buttons[MenuState.RULES] = [
            Button("Back to Menu", center_x - 150, self.H - 90, 300, 50,
                   lambda: self._change_state(MenuState.MAIN),
                   color=GRAY, hover_color=LIGHT_GRAY, text_color=BLACK),
        ]

    def _ai_label(self) -> str:
        return "Play against AI: " + ("ON" if self.settings["vs_ai"] else "OFF")

    def _theme_label(self) -> str:
        next_id = self.theme_manager.next_theme_id()
        next_theme = self.theme_manager.get_theme(next_id)
        return f"Switch to {next_theme.name if next_theme else next_id} Theme"

    def _change_state(self, new_state: MenuState):
        self.state = new_state

    def _choose_symbol(self, symbol: str):
        self.settings["player_symbol"] = symbol
        self.result = self.settings.copy()
        self.running = False

    def _toggle_ai(self):
        self.settings["vs_ai"] = not self.settings["vs_ai"]
        self._init_buttons()

    def _switch_theme(self):
        self.settings["theme"] = self.theme_manager.toggle_theme()
        print(f"[Menu] Theme: {self.settings['theme']}")
        # button colors follow the theme
        self._init_buttons()

    # ===== Exit confirmation helpers =====
    def _request_exit(self):
        """Open the confirmation modal instead of quitting instantly."""
        self._confirming_exit = True
        btn_w, btn_h, spacing = 160, 56, 30
        cx, cy = self.W // 2, self.H // 2 + 40
        self._exit_yes_btn = Button(
            "Yes", cx - btn_w - spacing // 2, cy, btn_w, btn_h,
            action=self._confirm_exit, color=RED, hover_color=(255, 120, 120), text_color=BLACK
        )
        self._exit_no_btn = Button(
            "No", cx + spacing // 2, cy, btn_w, btn_h,
            action=self._cancel_exit, color=GRAY, hover_color=LIGHT_GRAY, text_color=BLACK
        )

    def _cancel_exit(self):
        self._confirming_exit = False
        self._exit_yes_btn = None
        self._exit_no_btn = None

    def _confirm_exit(self):
        self.running = False
        self.result = None

    def _draw_exit_modal(self, mouse_pos):
        theme = self._get_current_theme()

        dim = pygame.Surface((self.W, self.H), pygame.SRCALPHA)
        dim.fill((0, 0, 0, 140))
        self.screen.blit(dim, (0, 0))

        box_w, box_h = 520, 240
        box = pygame.Rect((self.W - box_w) // 2, (self.H - box_h) // 2, box_w, box_h)
        pygame.draw.rect(self.screen, theme.background_color, box, border_radius=14)
        pygame.draw.rect(self.screen, theme.border_color, box, width=3, border_radius=14)

        title = self.font_subtitle.render("Exit Game?", True, theme.text_color)
        self.screen.blit(title, title.get_rect(center=(self.W // 2, box.y + 55)))
        msg = self.font_normal.render("Are you sure you want to quit?", True, theme.text_color)
        self.screen.blit(msg, msg.get_rect(center=(self.W // 2, box.y + 100)))

        if self._exit_yes_btn and self._exit_no_btn:
            self._exit_yes_btn.draw(self.screen, self.font_normal, mouse_pos)
            self._exit_no_btn.draw(self.screen, self.font_normal, mouse_pos)

    def _handle_escape(self):
        if self._confirming_exit:
            self._cancel_exit()
        elif self.state == MenuState.MAIN:
            self._request_exit()
        else:
            self._change_state(MenuState.MAIN)

    # ===== drawing =====
    def _draw_title(self):
        theme = self._get_current_theme()
        title = self.font_title.render("Tic Tac Toe", True, theme.text_color)
        self.screen.blit(title, title.get_rect(center=(self.W // 2, 90)))
        pygame.draw.line(self.screen, theme.border_color,
                         (self.W // 2 - 220, 140), (self.W // 2 + 220, 140), 3)

    def _draw_subtitle(self, text: str, y: int = 190):
        theme = self._get_current_theme()
        subtitle = self.font_normal.render(text, True, theme.text_color)
        self.screen.blit(subtitle, subtitle.get_rect(center=(self.W // 2, y)))

    def _draw_rules(self):
        theme = self._get_current_theme()
        self._draw_subtitle("Game Rules", 100)
        rules = [
            "• Get three of your symbol in a row, column or diagonal to win",
            "• X always moves first",
            "• Each turn has a time limit; when it runs out the turn is skipped",
            "• Against the AI you play the symbol you pick, the AI plays the other",
            "",
            "Controls:",
            "  [Left Click] Place your symbol",
            "  [R] Restart game",
            "  [T] Switch theme",
            "  [C] Change symbol / settings",
            "  [ESC] Back to menu",
        ]
        y = 150
        for rule in rules:
            font = self.font_normal if rule.startswith("•") else self.font_small
            text = font.render(rule, True, theme.text_color)
            self.screen.blit(text, (70, y))
            y += 34 if rule else 14

    def _draw_footer(self):
        footer_text = "Press ESC to exit" if self.state == MenuState.MAIN else "Press ESC to go back"
        surf = self.font_small.render(footer_text, True, GRAY)
        self.screen.blit(surf, surf.get_rect(center=(self.W // 2, self.H - 25)))

    def run(self) -> Optional[Dict[str, Any]]:
        while self.running:
            self.clock.tick(60)
            mouse_pos = pygame.mouse.get_pos()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._request_exit()

                elif event.type == pygame.KEYDOWN and self._confirming_exit:
                    if event.key in (pygame.K_RETURN, pygame.K_y):
                        self._confirm_exit()
                    elif event.key in (pygame.K_ESCAPE, pygame.K_n):
                        self._cancel_exit()

                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        self._handle_escape()
                    elif event.key == pygame.K_x and self.state == MenuState.MAIN:
                        self._choose_symbol("X")
                    elif event.key == pygame.K_o and self.state == MenuState.MAIN:
                        self._choose_symbol("O")

                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if self._confirming_exit:
                        # modal consumes the click
                        if self._exit_yes_btn and self._exit_yes_btn.is_hovered(mouse_pos):
                            self._exit_yes_btn.action()
                        elif self._exit_no_btn and self._exit_no_btn.is_hovered(mouse_pos):
                            self._exit_no_btn.action()
                    else:
                        for button in self.buttons.get(self.state, []):
                            if button.is_hovered(mouse_pos) and button.enabled and button.action:
                                button.action()
                                break

            self.screen.fill(self._get_current_theme().background_color)
            if self.state == MenuState.RULES:
                self._draw_rules()
            else:
                self._draw_title()
                self._draw_subtitle("Choose your symbol to start:")
            for button in self.buttons.get(self.state, []):
                button.draw(self.screen, self.font_subtitle if button.text in ("X", "O") else self.font_normal,
                            mouse_pos)
            self._draw_footer()

            if self._confirming_exit:
                self._draw_exit_modal(mouse_pos)

            pygame.display.flip()

        return self.result


def show_menu(preferences: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Returns {'player_symbol', 'vs_ai', 'theme'} or None when the player quits."""
    menu = Menu(preferences)
    return menu.run()
