# gridroute/app/viewer.py
#!/usr/bin/env python3
"""
Warehouse Route Viewer: Minimal Controls + Metrics

- Mouse:
    [LEFT]       -> pick start, then end (a third click clears)
    [RIGHT]      -> toggle obstacle
- Keyboard:
    [A]/[D]      -> select algorithm (A* / Dijkstra)
    [SPACE]      -> run/pause animated search
    [N]          -> single step
    [ENTER]      -> solve instantly
    [C]          -> clear start/end and route
    [G]          -> new random grid
    [S]          -> save current route
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Settings come from gridroute.config (GRIDROUTE_* env vars or --key=value).
"""

import logging
import sys
import time
from typing import List, Optional, Tuple

import pygame

from gridroute.app.saved_paths import SavedPathError, SavedPathStore, record_for_session
from gridroute.app.session import RouteSession
from gridroute.config import RouteConfig, resolve_config
from gridroute.core.errors import GridError
from gridroute.core.maps import load_map, random_grid
from gridroute.core.types import Algorithm, Cell
from gridroute.logging_config import configure_logging

logger = logging.getLogger(__name__)

# ---------- Layout ----------
PANEL_W = 420            # right band: metrics + buttons
GRID_MARGIN = 16
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
START_GREEN = ( 46,139, 87)
END_RED     = (220, 50, 47)
SHELF_DARK  = ( 45, 50, 60)
FLOOR_GRAY  = (200,200,200)
NEON_CYAN_A = (0,150,255,110)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)
PATH_BLUE   = (96,165,250)

BACKDROP    = (28,31,38)
CARD_BG     = (24,28,36)
BTN_IDLE    = (36,40,48)
BTN_HOVER   = (46,50,60)
BTN_ACTIVE  = (58,86,160)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)
TEXT_WARN   = (255,140,120)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        lit = self.active and self.togglable
        bg = BTN_ACTIVE if lit else BTN_HOVER if self.hover else BTN_IDLE
        pygame.draw.rect(screen, bg, self.rect, border_radius=6)
        if lit:
            pygame.draw.rect(screen, PATH_BLUE, self.rect, width=2, border_radius=6)
        text = font.render(self.label, True, TEXT_LIGHT)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, session: RouteSession, config: RouteConfig):
        pygame.init()

        self.session = session
        self.config = config
        self.store = SavedPathStore(config.saved_paths)
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        grid = session.grid
        self.cell_size = max(14, min(32, (720 - GRID_MARGIN*2) // grid.height))
        win_w = GRID_MARGIN*2 + grid.width * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + grid.height * self.cell_size, 600)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Warehouse Routes - Grid Pathfinding")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = config.steps_per_sec
        self._last_step_t = 0.0
        try:
            self._saved_count = len(self.store.list())
        except SavedPathError as ex:
            logger.error("%s", ex)
            self._saved_count = 0
            session.message = "Saved routes file is damaged"

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Grid pinned top-left, panel takes whatever width is left."""
        grid = self.session.grid
        fit_w = (win_w - PANEL_W - 2 * GRID_MARGIN) // grid.width
        fit_h = (win_h - 2 * GRID_MARGIN) // grid.height
        self.cell_size = max(8, min(fit_w, fit_h))

        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        panel_x = GRID_MARGIN * 2 + grid.width * self.cell_size
        self._right_band = pygame.Rect(panel_x, 0, max(PANEL_W, win_w - panel_x), win_h)
        self._build_buttons()

    def _cell_at_pixel(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        col = (pos[0] - ox) // self.cell_size
        row = (pos[1] - oy) // self.cell_size
        cell = (int(col), int(row))
        return cell if self.session.grid.in_bounds(cell) else None

    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        if t0 - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        self.session.step()
        if self.session.finished or not self.session.ready:
            self.running = False
        self._refresh_active_states()

    def _solve(self):
        self.running = False
        self.session.solve()
        self._refresh_active_states()

    def _quit(self):
        pygame.quit()
        sys.exit(0)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(640, e.w), max(480, e.h)), pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                handled = False
                for b in self._buttons:
                    handled = b.handle_mouse(e) or handled
                if e.type == pygame.MOUSEBUTTONDOWN and not handled:
                    self._handle_grid_click(e.pos, e.button)

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._quit()
        elif key == pygame.K_SPACE:
            self._toggle_run()
        elif key == pygame.K_n:
            self._do_step()
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._solve()
        elif key == pygame.K_c:
            self._clear()
        elif key == pygame.K_g:
            self._regenerate()
        elif key == pygame.K_s:
            self._save_route()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._bump_speed(+1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self._bump_speed(-1)
        elif key == pygame.K_a:
            self._switch_algo(Algorithm.ASTAR)
        elif key == pygame.K_d:
            self._switch_algo(Algorithm.DIJKSTRA)

    def _handle_grid_click(self, pos, button: int):
        cell = self._cell_at_pixel(pos)
        if cell is None:
            return
        self.running = False
        if button == 1:
            self.session.click(cell)
        elif button == 3:
            self.session.toggle_obstacle(cell)
        self._refresh_active_states()

    def _switch_algo(self, algorithm: Algorithm):
        self.running = False
        self.session.select_algorithm(algorithm)
        self._refresh_active_states()

    def _clear(self):
        self.running = False
        self.session.clear()
        self._refresh_active_states()

    def _regenerate(self):
        self.running = False
        self.session.regenerate()
        self._refresh_active_states()

    def _toggle_run(self):
        if self.session.finished:
            return
        if not self.session.ready:
            self.session.step()   # sets the "pick endpoints" message
            return
        self.running = not self.running
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    def _save_route(self):
        s = self.session
        if s.state != "Done":
            s.message = "Calculate a route before saving it"
            return
        name = f"Route {self._saved_count + 1}"
        try:
            self.store.add(record_for_session(s, name))
        except OSError:
            logger.exception("could not write %s", self.store.file)
            s.message = "Failed to save route"
            return
        except SavedPathError as ex:
            logger.error("%s", ex)
            s.message = "Saved routes file is damaged"
            return
        self._saved_count += 1
        s.message = f'Path "{name}" saved! Length: {s.length} units'

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill(BACKDROP)
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        s = self.session

        for row in s.grid.cells:
            for cell in row:
                rect = pygame.Rect(ox + cell.x*cs, oy + cell.y*cs, cs, cs)
                color = FLOOR_GRAY if cell.walkable else SHELF_DARK
                if cell.coord in s.path_cells:
                    color = PATH_BLUE
                pygame.draw.rect(self.screen, color, rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

        # overlays while searching
        if not s.finished:
            for overlay, rgba in ((s.closed_set, NEON_MAG_A), (s.open_set, NEON_CYAN_A)):
                for (col, row) in overlay:
                    tile = pygame.Surface((cs, cs), pygame.SRCALPHA); tile.fill(rgba)
                    self.screen.blit(tile, (ox + col*cs, oy + row*cs))

        if len(s.path) >= 2:
            pts = [(ox + col*cs + cs//2, oy + row*cs + cs//2) for (col, row) in s.path]
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, 3)

        if s.start is not None:
            self._draw_badge(s.start, START_GREEN, "S")
        if s.end is not None:
            self._draw_badge(s.end, END_RED, "E")

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], label: str):
        cs = self.cell_size
        ox, oy = self._grid_origin
        col, row = cell
        cx = ox + col*cs + cs//2
        cy = oy + row*cs + cs//2
        pygame.draw.circle(self.screen, color, (cx, cy), max(5, cs//2 - 2))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=(cx, cy)))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 36
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Solve", self._solve); y += h + gap
        add("Clear Points", self._clear); y += h + gap
        add("New Grid", self._regenerate); y += h + gap
        add("Save Route", self._save_route); y += h + gap
        add("Algo: A*", lambda: self._switch_algo(Algorithm.ASTAR), togglable=True, store_as="btn_algo_a"); y += h + gap
        add("Algo: Dijkstra", lambda: self._switch_algo(Algorithm.DIJKSTRA), togglable=True, store_as="btn_algo_d")

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(getattr(self, "running", False))
        if hasattr(self, "btn_algo_a"):
            self.btn_algo_a.set_active(self.session.algorithm is Algorithm.ASTAR)
        if hasattr(self, "btn_algo_d"):
            self.btn_algo_d.set_active(self.session.algorithm is Algorithm.DIJKSTRA)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        card = pygame.Rect(rb.x + 10, rb.y + 10, rb.width - 20, 230)
        pygame.draw.rect(self.screen, CARD_BG, card, border_radius=8)

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        s = self.session
        m = s.metrics
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"State: {s.state}")
        line(f"Popped: {m.get('popped', 0)}   Open: {m.get('open_size', 0)}   Closed: {m.get('closed_count', 0)}")
        line(f"Path cells: {len(s.path)}")
        line(f"Path Length: {s.length} units")
        line("-" * 26)
        line(f"Algo: {s.algorithm.label}   Speed: {self.steps_per_sec} steps/s")
        line(f"Saved routes: {self._saved_count}")
        if s.message:
            line(s.message, color=TEXT_WARN if s.state != "Done" else NEON_MINT)

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def build_session(config: RouteConfig) -> RouteSession:
    if config.map_file is not None:
        scenario = load_map(config.map_file)
        session = RouteSession(scenario.grid, config.algorithm, config.obstacle_ratio)
        scenario.grid.set_walkable(scenario.start, True)
        scenario.grid.set_walkable(scenario.goal, True)
        session.click(scenario.start)
        session.click(scenario.goal)
        return session
    grid = random_grid(config.grid_size, config.grid_size, config.obstacle_ratio)
    return RouteSession(grid, config.algorithm, config.obstacle_ratio)


def main(argv=None):
    try:
        config = resolve_config(argv)
    except ValueError as ex:
        print(f"Invalid settings: {ex}")
        sys.exit(2)
    configure_logging(config.log_level)
    try:
        session = build_session(config)
    except (OSError, GridError) as ex:
        logger.error("Failed to load map %s: %s", config.map_file, ex)
        sys.exit(1)
    Viewer(session, config).run()


if __name__ == "__main__":
    main()
