# src/ui.py
from __future__ import annotations
import pygame
from typing import Any, Dict, Optional, List, Sequence
from engine import Engine, Rejection
from history_viewer import format_date
from models import SYMBOLS, TIE
from menu import Button, GRAY, LIGHT_GRAY, RED, BLACK
from session_host import SessionHost
from theme_manager import get_theme_manager
import storage

HISTORY_ROWS = 6

REJECTION_NOTES = {
    Rejection.GAME_OVER: "Game over. Press R to restart.",
    Rejection.OCCUPIED: "That cell is taken.",
    Rejection.WRONG_TURN: "Wait for the AI to move.",
    Rejection.OUT_OF_RANGE: "Invalid move.",
}


def status_text(engine: Engine) -> str:
    outcome = engine.outcome
    if outcome.winner:
        return f"Winner: {outcome.winner}"
    if outcome.is_draw:
        return "It's a Tie!"
    return f"Next turn: {engine.active_symbol} ({engine.seconds_left()}s left)"


def score_text(host: SessionHost) -> str:
    sb = host.scoreboard
    pct = sb.percentages()
    parts = [f"{s} : {sb.wins[s]} ({pct[s]}%)" for s in SYMBOLS]
    parts.append(f"Ties : {sb.ties} ({pct[TIE]}%)")
    return "  |  ".join(parts)


def clamp_scroll(total: int, scroll: int, rows: int = HISTORY_ROWS) -> int:
    return max(0, min(scroll, total - rows))


def history_window(entries: Sequence, scroll: int = 0, rows: int = HISTORY_ROWS) -> list:
    """Rows shown in the table; scroll counts rows back from the newest."""
    scroll = clamp_scroll(len(entries), scroll, rows)
    end = len(entries) - scroll
    return list(entries[max(0, end - rows):end])


class UI:
    def __init__(self, host: SessionHost, preferences: Optional[Dict[str, Any]] = None,
                 width: int = 900, height: int = 820):
        pygame.init()
        self.host = host
        self.preferences = preferences if preferences is not None else storage.load_preferences()
        self.theme_manager = get_theme_manager()
        self.theme = self.theme_manager.get_current_theme()

        self.W, self.H = width, height
        self.screen = pygame.display.set_mode((self.W, self.H))
        pygame.display.set_caption("Tic Tac Toe")
        self.clock = pygame.time.Clock()

        self.cell = 100  # px
        self.gap = 10
        self.board_top = 130

        self.font_small = pygame.font.SysFont("segoeui", 18)
        self.font = pygame.font.SysFont("segoeui", 22, bold=True)
        self.font_big = pygame.font.SysFont("segoeui", 30, bold=True)
        self.font_piece = pygame.font.SysFont("segoeui", 56, bold=True)

        self.message: Optional[str] = None
        self.message_t = 0.0
        self._history_cache: Optional[List] = None
        self._history_scroll = 0

        # --- in-match confirmation modal ---
        self._confirming = False
        self._confirm_yes: Optional[Button] = None
        self._confirm_no: Optional[Button] = None

        self._leave_to: Optional[str] = None
        self._leave_requested = False
        self._build_buttons()

    @property
    def engine(self) -> Engine:
        engine = self.host.engine
        assert engine is not None, "the game screen needs a running session"
        return engine

    # ==== buttons ====
    def _build_buttons(self):
        t = self.theme
        btn_w, btn_h, spacing = 195, 50, 14
        total = 4 * btn_w + 3 * spacing
        x0 = (self.W - total) // 2
        y = self.H - 80
        labels = [
            ("Restart", self._restart),
            ("Reset All", self._request_reset_all),
            ("Change Symbol", self._change_symbol),
            ("Switch Theme", self._toggle_theme),
        ]
        self.buttons = [
            Button(text, x0 + i * (btn_w + spacing), y, btn_w, btn_h, action,
                   color=t.background_color, hover_color=t.highlight_color, text_color=t.text_color)
            for i, (text, action) in enumerate(labels)
        ]

    # ==== actions ====
    def _restart(self):
        self.host.reset()
        self.note("Restarted.")

    def _request_reset_all(self):
        self._confirming = True
        btn_w, btn_h, spacing = 160, 56, 30
        cx, cy = self.W // 2, self.H // 2 + 10
        self._confirm_yes = Button("Yes", cx - btn_w - spacing // 2, cy, btn_w, btn_h,
                                   self._confirm_reset_all, color=RED,
                                   hover_color=(255, 120, 120), text_color=BLACK)
        self._confirm_no = Button("No", cx + spacing // 2, cy, btn_w, btn_h,
                                  self._cancel_confirm, color=GRAY,
                                  hover_color=LIGHT_GRAY, text_color=BLACK)

    def _cancel_confirm(self):
        self._confirming = False
        self._confirm_yes = None
        self._confirm_no = None

    def _confirm_reset_all(self):
        self._cancel_confirm()
        self.host.reset_all()
        self._history_cache = None
        self._history_scroll = 0
        # back to symbol selection with a clean slate
        self._leave_to = "menu"
        self._leave_requested = True

    def _change_symbol(self):
        self._leave_to = "menu"
        self._leave_requested = True

    def _toggle_theme(self):
        theme_id = self.theme_manager.toggle_theme()
        self.theme = self.theme_manager.get_current_theme()
        self._build_buttons()
        storage.remember_theme(self.preferences, theme_id)
        print(f"[UI] Theme: {theme_id}")

    def note(self, msg: str, t: float = 2.0):
        self.message = msg
        self.message_t = t

    # ==== layout ====
    def board_rect(self) -> pygame.Rect:
        size = 3 * self.cell + 2 * self.gap
        return pygame.Rect((self.W - size) // 2, self.board_top, size, size)

    def cell_rect(self, index: int) -> pygame.Rect:
        r = self.board_rect()
        row, col = divmod(index, 3)
        return pygame.Rect(r.x + col * (self.cell + self.gap),
                           r.y + row * (self.cell + self.gap),
                           self.cell, self.cell)

    def pixel_to_cell(self, x: int, y: int) -> Optional[int]:
        for i in range(9):
            if self.cell_rect(i).collidepoint(x, y):
                return i
        return None

    # ==== drawing ====
    def draw_board(self) -> None:
        t = self.theme
        board = self.engine.board
        line = self.engine.outcome.line
        for i in range(9):
            rect = self.cell_rect(i)
            lit = i in line
            pygame.draw.rect(self.screen, t.highlight_color if lit else t.background_color,
                             rect, border_radius=12)
            pygame.draw.rect(self.screen, t.winner_border_color if lit else t.border_color,
                             rect, 3 if lit else 2, border_radius=12)
            v = board[i]
            if v is None:
                continue
            color = t.piece_x_color if v == "X" else t.piece_o_color
            txt = self.font_piece.render(v, True, color)
            self.screen.blit(txt, txt.get_rect(center=rect.center))

    def draw_hud(self, dt: float) -> None:
        t = self.theme
        title = self.font_big.render("Tic Tac Toe", True, t.text_color)
        self.screen.blit(title, title.get_rect(center=(self.W // 2, 40)))

        status = self.font.render(status_text(self.engine), True, t.text_color)
        self.screen.blit(status, status.get_rect(center=(self.W // 2, 95)))

        r = self.board_rect()
        y = r.bottom + 30
        scores_title = self.font.render("Scores", True, t.text_color)
        self.screen.blit(scores_title, scores_title.get_rect(center=(self.W // 2, y)))
        scores = self.font_small.render(score_text(self.host), True, t.text_color)
        self.screen.blit(scores, scores.get_rect(center=(self.W // 2, y + 28)))

        if self.message:
            self.message_t -= dt
            if self.message_t <= 0:
                self.message = None
            else:
                msg = self.font_small.render(self.message, True, t.border_color)
                self.screen.blit(msg, msg.get_rect(center=(self.W // 2, y + 56)))

        self.draw_history(y + 80)

    def draw_history(self, top: int) -> None:
        if self._history_cache is None:
            self._history_cache = self.host.history()
        entries = self._history_cache
        if not entries:
            return
        t = self.theme
        left, width = self.W // 2 - 260, 520
        head = self.font.render("Game History", True, t.text_color)
        self.screen.blit(head, (left, top))
        if len(entries) > HISTORY_ROWS:
            hint = self.font_small.render(f"{len(entries)} games, scroll to see more",
                                          True, t.border_color)
            self.screen.blit(hint, hint.get_rect(topright=(left + width, top + 6)))
        y = top + 32
        self.screen.blit(self.font_small.render("Date", True, t.text_color), (left + 8, y))
        self.screen.blit(self.font_small.render("Result", True, t.text_color), (left + 320, y))
        y += 24
        pygame.draw.line(self.screen, t.border_color, (left, y), (left + width, y), 2)
        # newest rows last, like the saved log
        for entry in history_window(entries, self._history_scroll):
            y += 4
            self.screen.blit(self.font_small.render(format_date(entry.date), True, t.text_color),
                             (left + 8, y))
            self.screen.blit(self.font_small.render(entry.label, True, t.text_color),
                             (left + 320, y))
            y += 22
            pygame.draw.line(self.screen, t.border_color, (left, y), (left + width, y), 1)

    def scroll_history(self, rows: int) -> None:
        """Positive rows scroll towards older games."""
        if self._history_cache is None:
            self._history_cache = self.host.history()
        self._history_scroll = clamp_scroll(len(self._history_cache), self._history_scroll + rows)

    def _draw_confirm_modal(self):
        if not self._confirming:
            return
        t = self.theme
        dim = pygame.Surface((self.W, self.H), pygame.SRCALPHA)
        dim.fill((0, 0, 0, 140))
        self.screen.blit(dim, (0, 0))

        box_w, box_h = 560, 240
        box = pygame.Rect((self.W - box_w) // 2, (self.H - box_h) // 2, box_w, box_h)
        pygame.draw.rect(self.screen, t.background_color, box, border_radius=14)
        pygame.draw.rect(self.screen, t.border_color, box, width=3, border_radius=14)

        title = self.font_big.render("Reset scores and history?", True, t.text_color)
        self.screen.blit(title, title.get_rect(center=(self.W // 2, box.y + 50)))
        msg = self.font_small.render("The saved game history will be deleted.", True, t.text_color)
        self.screen.blit(msg, msg.get_rect(center=(self.W // 2, box.y + 95)))

        mouse = pygame.mouse.get_pos()
        self._confirm_yes.draw(self.screen, self.font, mouse)
        self._confirm_no.draw(self.screen, self.font, mouse)

    # ==== loop ====
    def _handle_click(self, pos) -> None:
        if self._confirming:
            # modal consumes the click
            if self._confirm_yes and self._confirm_yes.is_hovered(pos):
                self._confirm_yes.action()
            elif self._confirm_no and self._confirm_no.is_hovered(pos):
                self._confirm_no.action()
            return

        for button in self.buttons:
            if button.is_hovered(pos):
                button.action()
                return

        index = self.pixel_to_cell(*pos)
        if index is None:
            return
        reason = self.engine.check_move(index)
        if reason is not None or not self.host.apply_move(index):
            self.note(REJECTION_NOTES.get(reason, "Invalid move."))

    def run(self) -> Optional[str]:
        """Returns 'menu' to go back to symbol selection, None to quit."""
        was_over = self.engine.is_over
        while not self._leave_requested:
            dt = self.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._leave_to = None
                    self._leave_requested = True

                elif event.type == pygame.KEYDOWN and self._confirming:
                    if event.key in (pygame.K_RETURN, pygame.K_y):
                        self._confirm_reset_all()
                    elif event.key in (pygame.K_ESCAPE, pygame.K_n):
                        self._cancel_confirm()

                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        self._change_symbol()
                    elif event.key == pygame.K_r:
                        self._restart()
                    elif event.key == pygame.K_t:
                        self._toggle_theme()
                    elif event.key == pygame.K_c:
                        self._change_symbol()

                elif event.type == pygame.MOUSEWHEEL and not self._confirming:
                    self.scroll_history(event.y)

                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._handle_click(event.pos)

            if not self._confirming:
                self.host.tick(dt)

            # a finished game adds a row to the history table
            if self.engine.is_over and not was_over:
                self._history_cache = None
            was_over = self.engine.is_over

            self.screen.fill(self.theme.background_color)
            self.draw_board()
            self.draw_hud(dt)
            for button in self.buttons:
                button.draw(self.screen, self.font, pygame.mouse.get_pos())
            self._draw_confirm_modal()
            pygame.display.flip()

        return self._leave_to
