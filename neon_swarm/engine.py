"""
Rendering Engine
=================
Double-buffered terminal rasterizer for draw commands.

The playfield is measured in units; one terminal cell covers
CELL_WIDTH x CELL_HEIGHT units and one braille dot a quarter of that
height and half that width. Shapes are painted as braille dots; entities
with a glyph also get a full character at their center cell.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import math

try:
    from blessed import Terminal
except ImportError:
    raise ImportError("'blessed' library required. Install with: pip install blessed")

from .config import CELL_WIDTH, CELL_HEIGHT, HUD_ROWS, COLOR_WHITE

RGB = Tuple[int, int, int]

DOT_WIDTH = CELL_WIDTH / 2
DOT_HEIGHT = CELL_HEIGHT / 4

GLOW_ALPHA = 0.35  # Brightness of the halo ring relative to the body
GLOW_SPREAD = 0.4  # Halo distance per unit of glow


def shade(color, alpha: float = 1.0) -> RGB:
    """Blend an RGB(A) color toward black by `alpha`."""
    if len(color) == 4:
        alpha *= color[3]
    alpha = max(0.0, min(1.0, alpha))
    return (int(color[0] * alpha), int(color[1] * alpha), int(color[2] * alpha))


@dataclass
class Cell:
    """A single cell in the render buffer."""
    char: str = ' '
    fg_color: Optional[RGB] = None
    bg_color: Optional[RGB] = None

    def matches(self, other: 'Cell') -> bool:
        """Check if two cells are visually identical."""
        return (
            self.char == other.char and
            self.fg_color == other.fg_color and
            self.bg_color == other.bg_color
        )

    def reset(self):
        self.char = ' '
        self.fg_color = None
        self.bg_color = None


class DoubleBuffer:
    """
    Double-buffered terminal renderer.

    Writes to a back buffer, then swaps to front buffer,
    only updating cells that changed. No screen clears needed.
    """

    def __init__(self, term: Terminal):
        self.term = term
        self.width = term.width
        self.height = term.height
        self.front: List[List[Cell]] = []
        self.back: List[List[Cell]] = []
        self._init_buffers()
        self._normal = term.normal

    def _init_buffers(self):
        self.front = [[Cell() for _ in range(self.width)] for _ in range(self.height)]
        self.back = [[Cell() for _ in range(self.width)] for _ in range(self.height)]

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height
        self._init_buffers()

    def clear_back(self):
        for row in self.back:
            for cell in row:
                cell.reset()

    def put(self, x: int, y: int, char: str, fg_color: Optional[RGB] = None,
            bg_color: Optional[RGB] = None):
        """Put a character in the back buffer at exact position."""
        if 0 <= x < self.width and 0 <= y < self.height:
            cell = self.back[y][x]
            cell.char = char
            cell.fg_color = fg_color
            cell.bg_color = bg_color

    def put_string(self, x: int, y: int, text: str, fg_color: Optional[RGB] = None,
                   bg_color: Optional[RGB] = None):
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg_color, bg_color)

    def present(self) -> str:
        """
        Swap buffers and return the escape sequences for changed cells.

        Adjacent changed cells on a row share one cursor move, and colors
        are only re-sent when they differ from the previous cell written.
        """
        term = self.term
        parts = []

        for y, (back_row, front_row) in enumerate(zip(self.back, self.front)):
            cursor_x = -1
            style = None
            for x, cell in enumerate(back_row):
                if cell.matches(front_row[x]):
                    continue

                if x != cursor_x:
                    parts.append(term.move_xy(x, y))
                cell_style = (cell.fg_color, cell.bg_color)
                if cell_style != style:
                    parts.append(self._normal)
                    if cell.bg_color is not None:
                        parts.append(term.on_color_rgb(*cell.bg_color))
                    if cell.fg_color is not None:
                        parts.append(term.color_rgb(*cell.fg_color))
                    style = cell_style
                parts.append(cell.char or ' ')
                cursor_x = x + 1

        self.front, self.back = self.back, self.front
        return ''.join(parts)


class BrailleCanvas:
    """
    Sub-pixel rendering using Unicode Braille patterns.

    Each character cell maps to a 2x4 dot grid. A cell holds one color:
    the last dot set in it wins.
    """

    # Braille dot bits indexed [row][column]
    DOT_BITS = (
        (0x01, 0x08),
        (0x02, 0x10),
        (0x04, 0x20),
        (0x40, 0x80),
    )
    BASE = 0x2800

    def __init__(self, char_width: int, char_height: int):
        self.char_width = char_width
        self.char_height = char_height
        self.pixel_width = char_width * 2
        self.pixel_height = char_height * 4
        self.canvas: List[List[int]] = []
        self.colors: List[List[RGB]] = []
        self.clear()

    def clear(self):
        self.canvas = [[0] * self.char_width for _ in range(self.char_height)]
        self.colors = [[COLOR_WHITE] * self.char_width for _ in range(self.char_height)]

    def set_pixel(self, px: int, py: int, color: RGB = COLOR_WHITE):
        if 0 <= px < self.pixel_width and 0 <= py < self.pixel_height:
            char_x, dot_x = divmod(px, 2)
            char_y, dot_y = divmod(py, 4)
            self.canvas[char_y][char_x] |= self.DOT_BITS[dot_y][dot_x]
            self.colors[char_y][char_x] = color

    def get_char(self, cx: int, cy: int) -> Tuple[str, RGB]:
        if 0 <= cx < self.char_width and 0 <= cy < self.char_height:
            pattern = self.canvas[cy][cx]
            if pattern > 0:
                return chr(self.BASE + pattern), self.colors[cy][cx]
        return '', COLOR_WHITE

    def blit_to_buffer(self, buffer: DoubleBuffer, offset_x: int = 0, offset_y: int = 0):
        """Render braille canvas onto the buffer. Only overlays empty cells."""
        for cy in range(self.char_height):
            for cx in range(self.char_width):
                char, color = self.get_char(cx, cy)
                if not char:
                    continue
                bx = cx + offset_x
                by = cy + offset_y
                if 0 <= bx < buffer.width and 0 <= by < buffer.height:
                    if buffer.back[by][bx].char == ' ':
                        buffer.put(bx, by, char, color)


@dataclass
class GameRenderer:
    """
    Terminal renderer for the playfield and UI rows.

    Screen shake is a unit offset from the simulation, applied to game-area
    drawing only. UI elements bypass it.
    """
    term: Terminal
    ui_rows: int = HUD_ROWS
    buffer: DoubleBuffer = field(init=False)
    braille: BrailleCanvas = field(init=False)

    shake_x: float = 0.0  # Units
    shake_y: float = 0.0

    show_fps: bool = False
    current_fps: float = 60.0

    def __post_init__(self):
        self.buffer = DoubleBuffer(self.term)
        self.braille = BrailleCanvas(self.term.width, self.term.height - self.ui_rows)

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    @property
    def game_height(self) -> int:
        """Height of the playable area (excluding UI rows)."""
        return self.buffer.height - self.ui_rows

    @property
    def playfield_size(self) -> Tuple[float, float]:
        """Playfield extent in units."""
        return self.width * CELL_WIDTH, self.game_height * CELL_HEIGHT

    def playfield_cell(self, ux: float, uy: float) -> Tuple[int, int]:
        """Terminal cell holding a playfield point."""
        return int(ux // CELL_WIDTH), int(uy // CELL_HEIGHT)

    def set_shake(self, offset: Tuple[float, float]):
        self.shake_x, self.shake_y = offset

    def begin_frame(self):
        self.buffer.clear_back()
        self.braille.clear()

    def end_frame(self) -> str:
        """Blit braille overlay and present."""
        self.braille.blit_to_buffer(self.buffer)
        return self.buffer.present()

    def _shake_cells(self) -> Tuple[int, int]:
        return round(self.shake_x / CELL_WIDTH), round(self.shake_y / CELL_HEIGHT)

    def put(self, x: int, y: int, char: str, fg_color: Optional[RGB] = None,
            with_shake: bool = True):
        """
        Put a character in the buffer.

        Game-area elements use with_shake=True so they jitter during
        screen shake. UI elements use with_shake=False.
        """
        if with_shake and y < self.game_height:
            sx, sy = self._shake_cells()
            x += sx
            y += sy
        self.buffer.put(x, y, char, fg_color)

    def put_string(self, x: int, y: int, text: str, fg_color: Optional[RGB] = None,
                   with_shake: bool = True):
        if with_shake and y < self.game_height:
            sx, sy = self._shake_cells()
            x += sx
            y += sy
        self.buffer.put_string(x, y, text, fg_color)

    def put_dot(self, ux: float, uy: float, color: RGB = COLOR_WHITE):
        """Set the braille dot covering a playfield point (shake applied)."""
        px = int((ux + self.shake_x) // DOT_WIDTH)
        py = int((uy + self.shake_y) // DOT_HEIGHT)
        self.braille.set_pixel(px, py, color)

    def resize(self, width: int, height: int):
        self.buffer.resize(width, height)
        self.braille = BrailleCanvas(width, height - self.ui_rows)

    def draw_box(self, x: int, y: int, w: int, h: int, color: RGB,
                 char: str = '#', with_shake: bool = True):
        """Draw a rectangular border."""
        for i in range(w):
            self.put(x + i, y, char, color, with_shake)
            self.put(x + i, y + h - 1, char, color, with_shake)
        for j in range(1, h - 1):
            self.put(x, y + j, char, color, with_shake)
            self.put(x + w - 1, y + j, char, color, with_shake)

    # -------------------------------------------------------------------------
    # Shapes
    # -------------------------------------------------------------------------

    def fill_circle(self, cx: float, cy: float, radius: float, color: RGB):
        """Fill every dot whose center lies inside the circle."""
        if radius < DOT_WIDTH:
            self.put_dot(cx, cy, color)
            return

        r2 = radius * radius
        y = cy - radius
        while y <= cy + radius:
            x = cx - radius
            while x <= cx + radius:
                if (x - cx) ** 2 + (y - cy) ** 2 <= r2:
                    self.put_dot(x, y, color)
                x += DOT_WIDTH
            y += DOT_HEIGHT

    def ring(self, cx: float, cy: float, radius: float, color: RGB):
        steps = max(8, int(2 * math.pi * radius / DOT_WIDTH))
        for i in range(steps):
            a = 2 * math.pi * i / steps
            self.put_dot(cx + math.cos(a) * radius, cy + math.sin(a) * radius, color)

    def beam(self, x: float, y: float, angle: float, length: float, color: RGB):
        """Line of dots from (x, y) along `angle`."""
        steps = max(1, int(length / (DOT_WIDTH / 2)))
        dx = math.cos(angle)
        dy = math.sin(angle)
        for i in range(steps + 1):
            d = length * i / steps
            self.put_dot(x + dx * d, y + dy * d, color)

    def draw_commands(self, commands: list):
        """Rasterize draw commands in order."""
        for cmd in commands:
            color = shade(cmd.color)
            if cmd.shape == 'rect':
                self.beam(cmd.x, cmd.y, cmd.angle, cmd.length, color)
                continue

            if cmd.glow and cmd.radius >= DOT_WIDTH:
                self.ring(cmd.x, cmd.y, cmd.radius + cmd.glow * GLOW_SPREAD,
                          shade(cmd.color, GLOW_ALPHA))
            self.fill_circle(cmd.x, cmd.y, cmd.radius, color)

            if cmd.glyph:
                cx, cy = self.playfield_cell(cmd.x, cmd.y)
                self.put(cx, cy, cmd.glyph, color)
