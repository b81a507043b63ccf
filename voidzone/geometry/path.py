"""
SVG Path Codec
==============

Parses SVG path data into flattened subpaths and writes polygons back out.

Design:
- Full path command set (M L H V C S Q T A Z, absolute and relative)
- Curves flattened to straight segments with a fixed step count
- Any syntax problem raises MalformedPathError (caller decides to skip)
- Output is always ``M x y L x y ... Z``

Fill semantics are not decided here: every subpath is returned as an open
vertex list and the rasterizer closes it implicitly.
"""

import math
import re
from typing import List, Optional, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]

_COMMANDS = "MmLlHhVvCcSsQqTtAaZz"
_ARG_COUNTS = {
    "M": 2, "L": 2, "H": 1, "V": 1, "C": 6,
    "S": 4, "Q": 4, "T": 2, "A": 7, "Z": 0,
}
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_WHITESPACE = " \t\r\n\f"


class MalformedPathError(ValueError):
    """Path data could not be parsed."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at position {position}")
        self.position = position


class _PathScanner:
    """Cursor over path data; knows separators, numbers, flags and commands."""

    def __init__(self, data: str):
        self.data = data
        self.pos = 0

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.data) and self.data[self.pos] in _WHITESPACE:
            self.pos += 1

    def _skip_separator(self) -> None:
        self._skip_whitespace()
        if self.pos < len(self.data) and self.data[self.pos] == ",":
            self.pos += 1
            self._skip_whitespace()

    def at_end(self) -> bool:
        self._skip_whitespace()
        return self.pos >= len(self.data)

    def peek_command(self) -> Optional[str]:
        self._skip_whitespace()
        if self.pos < len(self.data) and self.data[self.pos] in _COMMANDS:
            return self.data[self.pos]
        return None

    def read_command(self) -> str:
        command = self.peek_command()
        if command is None:
            raise MalformedPathError("expected path command", self.pos)
        self.pos += 1
        return command

    def has_number(self) -> bool:
        self._skip_separator()
        return _NUMBER_RE.match(self.data, self.pos) is not None

    def read_number(self) -> float:
        self._skip_separator()
        match = _NUMBER_RE.match(self.data, self.pos)
        if match is None:
            found = self.data[self.pos:self.pos + 1] or "end of data"
            raise MalformedPathError(f"expected number, found {found!r}", self.pos)
        self.pos = match.end()
        return float(match.group())

    def read_flag(self) -> bool:
        # Arc flags are single characters and may be packed: "a5 5 0 01 10 10"
        self._skip_separator()
        if self.pos < len(self.data) and self.data[self.pos] in "01":
            flag = self.data[self.pos] == "1"
            self.pos += 1
            return flag
        raise MalformedPathError("expected arc flag 0 or 1", self.pos)


def _cubic_points(p0: Point, p1: Point, p2: Point, p3: Point, steps: int) -> List[Point]:
    t = np.linspace(0.0, 1.0, steps + 1)[1:, None]
    mt = 1.0 - t
    pts = (
        mt ** 3 * np.asarray(p0)
        + 3 * mt ** 2 * t * np.asarray(p1)
        + 3 * mt * t ** 2 * np.asarray(p2)
        + t ** 3 * np.asarray(p3)
    )
    return [tuple(p) for p in pts.tolist()]


def _quadratic_points(p0: Point, p1: Point, p2: Point, steps: int) -> List[Point]:
    t = np.linspace(0.0, 1.0, steps + 1)[1:, None]
    mt = 1.0 - t
    pts = mt ** 2 * np.asarray(p0) + 2 * mt * t * np.asarray(p1) + t ** 2 * np.asarray(p2)
    return [tuple(p) for p in pts.tolist()]


def _vector_angle(ux: float, uy: float, vx: float, vy: float) -> float:
    return math.atan2(ux * vy - uy * vx, ux * vx + uy * vy)


def _arc_points(
    p0: Point,
    rx: float,
    ry: float,
    rotation_deg: float,
    large_arc: bool,
    sweep: bool,
    p1: Point,
    steps: int,
) -> List[Point]:
    """
    Flatten an elliptical arc (endpoint parameterization).

    Follows the SVG implementation notes: out-of-range radii are scaled up,
    zero radii degrade to a straight line, identical endpoints draw nothing.
    """
    x0, y0 = p0
    x1, y1 = p1
    if (x0, y0) == (x1, y1):
        return []
    rx, ry = abs(rx), abs(ry)
    if rx == 0 or ry == 0:
        return [p1]

    phi = math.radians(rotation_deg)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)
    dx2 = (x0 - x1) / 2.0
    dy2 = (y0 - y1) / 2.0
    x1p = cos_phi * dx2 + sin_phi * dy2
    y1p = -sin_phi * dx2 + cos_phi * dy2

    radii_check = (x1p ** 2) / (rx ** 2) + (y1p ** 2) / (ry ** 2)
    if radii_check > 1.0:
        scale = math.sqrt(radii_check)
        rx *= scale
        ry *= scale

    numerator = rx ** 2 * ry ** 2 - rx ** 2 * y1p ** 2 - ry ** 2 * x1p ** 2
    denominator = rx ** 2 * y1p ** 2 + ry ** 2 * x1p ** 2
    coef = math.sqrt(max(0.0, numerator / denominator))
    if large_arc == sweep:
        coef = -coef
    cxp = coef * rx * y1p / ry
    cyp = -coef * ry * x1p / rx
    cx = cos_phi * cxp - sin_phi * cyp + (x0 + x1) / 2.0
    cy = sin_phi * cxp + cos_phi * cyp + (y0 + y1) / 2.0

    ux, uy = (x1p - cxp) / rx, (y1p - cyp) / ry
    vx, vy = (-x1p - cxp) / rx, (-y1p - cyp) / ry
    theta1 = _vector_angle(1.0, 0.0, ux, uy)
    delta = _vector_angle(ux, uy, vx, vy)
    if not sweep and delta > 0:
        delta -= 2 * math.pi
    elif sweep and delta < 0:
        delta += 2 * math.pi

    theta = theta1 + delta * np.linspace(0.0, 1.0, steps + 1)[1:]
    xs = cx + rx * np.cos(theta) * cos_phi - ry * np.sin(theta) * sin_phi
    ys = cy + rx * np.cos(theta) * sin_phi + ry * np.sin(theta) * cos_phi
    points = list(zip(xs.tolist(), ys.tolist()))
    points[-1] = (x1, y1)
    return points


def parse_path_data(data: str, curve_steps: int = 16) -> List[np.ndarray]:
    """
    Parse SVG path data into flattened subpaths.

    Args:
        data: Path data string (SVG path mini-language)
        curve_steps: Straight segments per curve or arc

    Returns:
        List of Nx2 float arrays, one per subpath with at least two vertices.
        Subpaths are not closed explicitly.

    Raises:
        MalformedPathError: On any syntax error

    Example:
        >>> parse_path_data("M0 0 H10 V10 H0 Z")[0].tolist()
        [[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]]
    """
    if curve_steps < 1:
        raise ValueError(f"curve_steps must be >= 1, got {curve_steps}")

    scanner = _PathScanner(data)
    subpaths: List[np.ndarray] = []
    current: List[Point] = []
    cursor: Point = (0.0, 0.0)
    start: Point = (0.0, 0.0)
    previous: Optional[str] = None
    # Last control point of the previous curve, for S/s and T/t reflection
    last_control: Optional[Point] = None

    def finish_subpath() -> None:
        if len(current) >= 2:
            subpaths.append(np.asarray(current, dtype=np.float64))

    if scanner.at_end():
        return subpaths
    if scanner.peek_command() not in ("M", "m"):
        raise MalformedPathError("path data must begin with a moveto", scanner.pos)

    while not scanner.at_end():
        command = scanner.peek_command()
        if command is not None:
            scanner.read_command()
        elif scanner.has_number() and previous is not None and previous not in "Zz":
            # Implicit repetition; extra moveto pairs are linetos
            command = {"M": "L", "m": "l"}.get(previous, previous)
        else:
            raise MalformedPathError(
                f"unexpected character {scanner.data[scanner.pos]!r}", scanner.pos
            )

        upper = command.upper()
        relative = command.islower()
        ox, oy = cursor if relative else (0.0, 0.0)

        if upper == "Z":
            finish_subpath()
            current = [start]
            cursor = start
            last_control = None
            previous = command
            continue

        if upper == "A":
            rx = scanner.read_number()
            ry = scanner.read_number()
            rotation = scanner.read_number()
            large_arc = scanner.read_flag()
            sweep = scanner.read_flag()
            args = [scanner.read_number(), scanner.read_number()]
        else:
            args = [scanner.read_number() for _ in range(_ARG_COUNTS[upper])]

        control: Optional[Point] = None
        if upper == "M":
            finish_subpath()
            cursor = (ox + args[0], oy + args[1])
            start = cursor
            current = [cursor]
        elif upper == "L":
            cursor = (ox + args[0], oy + args[1])
            current.append(cursor)
        elif upper == "H":
            cursor = (ox + args[0], cursor[1])
            current.append(cursor)
        elif upper == "V":
            cursor = (cursor[0], oy + args[0])
            current.append(cursor)
        elif upper in ("C", "S"):
            if upper == "C":
                c1 = (ox + args[0], oy + args[1])
                rest = args[2:]
            else:
                if previous is not None and previous in "CcSs" and last_control is not None:
                    c1 = (2 * cursor[0] - last_control[0], 2 * cursor[1] - last_control[1])
                else:
                    c1 = cursor
                rest = args
            c2 = (ox + rest[0], oy + rest[1])
            end = (ox + rest[2], oy + rest[3])
            current.extend(_cubic_points(cursor, c1, c2, end, curve_steps))
            control = c2
            cursor = end
        elif upper in ("Q", "T"):
            if upper == "Q":
                c1 = (ox + args[0], oy + args[1])
                end = (ox + args[2], oy + args[3])
            else:
                if previous is not None and previous in "QqTt" and last_control is not None:
                    c1 = (2 * cursor[0] - last_control[0], 2 * cursor[1] - last_control[1])
                else:
                    c1 = cursor
                end = (ox + args[0], oy + args[1])
            current.extend(_quadratic_points(cursor, c1, end, curve_steps))
            control = c1
            cursor = end
        elif upper == "A":
            end = (ox + args[0], oy + args[1])
            try:
                arc = _arc_points(cursor, rx, ry, rotation, large_arc, sweep, end, curve_steps)
            except (OverflowError, ZeroDivisionError) as e:
                raise MalformedPathError(f"arc parameters out of range ({e})", scanner.pos)
            current.extend(arc)
            cursor = end

        last_control = control
        previous = command

    finish_subpath()
    return subpaths


def format_path_data(points: Sequence[Sequence[float]], precision: int = 2) -> str:
    """
    Write a closed polygon as SVG path data.

    Args:
        points: Polygon vertices (implicitly closed, first vertex not repeated)
        precision: Decimal places per coordinate

    Returns:
        ``"M x y L x y ... Z"``

    Raises:
        ValueError: If fewer than 3 vertices are given
    """
    if len(points) < 3:
        raise ValueError(f"Polygon must have at least 3 vertices, got {len(points)}")

    parts = []
    for index, (x, y) in enumerate(points):
        command = "M" if index == 0 else "L"
        parts.append(f"{command}{x:.{precision}f} {y:.{precision}f}")
    parts.append("Z")
    return " ".join(parts)
