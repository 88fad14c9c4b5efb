from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Sequence

from chartgeom.scales import format_coordinate


PathOp = Literal["move", "line", "curve"]


@dataclass(frozen=True)
class PathCommand:
    """One draw command; ``cx``/``cy`` hold the quadratic control point for curves."""

    op: PathOp
    x: float
    y: float
    cx: float | None = None
    cy: float | None = None


def build_path(points: Sequence[tuple[float, float]], *, smooth: bool = False) -> tuple[PathCommand, ...]:
    if len(points) < 2:
        return ()
    x0, y0 = points[0]
    commands = [PathCommand(op="move", x=float(x0), y=float(y0))]
    if not smooth or len(points) < 3:
        commands.extend(PathCommand(op="line", x=float(x), y=float(y)) for x, y in points[1:])
        return tuple(commands)

    last = len(points) - 1
    for i in range(1, last):
        cx, cy = points[i]
        nx, ny = points[i + 1]
        commands.append(
            PathCommand(
                op="curve",
                x=(cx + nx) / 2.0,
                y=(cy + ny) / 2.0,
                cx=float(cx),
                cy=float(cy),
            )
        )
    # The last segment stays straight so the trace ends exactly on the final point.
    lx, ly = points[last]
    commands.append(PathCommand(op="line", x=float(lx), y=float(ly)))
    return tuple(commands)


def to_svg_path_data(commands: Iterable[PathCommand]) -> str:
    parts: list[str] = []
    for cmd in commands:
        if cmd.op == "move":
            parts.append(f"M {format_coordinate(cmd.x)} {format_coordinate(cmd.y)}")
        elif cmd.op == "line":
            parts.append(f"L {format_coordinate(cmd.x)} {format_coordinate(cmd.y)}")
        else:
            assert cmd.cx is not None and cmd.cy is not None
            parts.append(
                f"Q {format_coordinate(cmd.cx)} {format_coordinate(cmd.cy)} "
                f"{format_coordinate(cmd.x)} {format_coordinate(cmd.y)}"
            )
    return " ".join(parts)
