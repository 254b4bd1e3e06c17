"""Turns a breakout game state into drawable shapes on a canvas."""

from __future__ import annotations

from dataclasses import dataclass

from .geometry import Vec2
from .mechanics import MODEL_GRID_LEN_X, MODEL_GRID_LEN_Y, Ball, BreakoutMechanics, Brick, Panel

Color = tuple[int, int, int]

YELLOW: Color = (255, 255, 0)
WHITE: Color = (255, 255, 255)
DARK_GRAY: Color = (96, 96, 96)

BALL_STROKE_WIDTH = 2.0


@dataclass(frozen=True)
class CircleShape:
    """An outlined circle."""

    center: Vec2
    radius: float
    stroke_width: float
    color: Color


@dataclass(frozen=True)
class RectShape:
    """A filled axis-aligned rectangle with ``min`` at the top left."""

    min: Vec2
    max: Vec2
    color: Color


Shape = CircleShape | RectShape


class GameDrawer:
    """Scales a game state from model coordinates onto a canvas of ``canvas_size``."""

    def __init__(self, canvas_size: Vec2, game_state: BreakoutMechanics) -> None:
        self.canvas_size = canvas_size
        self.game_state = game_state

    def _scale(self, pos: Vec2) -> Vec2:
        return Vec2(
            pos.x * self.canvas_size.x / MODEL_GRID_LEN_X,
            pos.y * self.canvas_size.y / MODEL_GRID_LEN_Y,
        )

    def _scale_x(self, len_x: float) -> float:
        return len_x * self.canvas_size.x / MODEL_GRID_LEN_X

    def _rect(self, corner_a: Vec2, corner_b: Vec2, color: Color) -> RectShape:
        a = self._scale(corner_a)
        b = self._scale(corner_b)
        return RectShape(
            Vec2(min(a.x, b.x), min(a.y, b.y)),
            Vec2(max(a.x, b.x), max(a.y, b.y)),
            color,
        )

    def shapes(self) -> list[Shape]:
        """All bricks, then the ball, then the panel."""
        result: list[Shape] = [self._draw_brick(b) for b in self.game_state.bricks]
        result.append(self._draw_ball(self.game_state.ball))
        result.append(self._draw_panel(self.game_state.panel))
        return result

    def _draw_ball(self, ball: Ball) -> CircleShape:
        ball.check_bounds()
        return CircleShape(
            self._scale(ball.shape.center),
            self._scale_x(ball.shape.radius),
            BALL_STROKE_WIDTH,
            YELLOW,
        )

    def _draw_panel(self, panel: Panel) -> RectShape:
        panel.check_bounds()
        return self._rect(panel.shape.min, panel.shape.max, WHITE)

    def _draw_brick(self, brick: Brick) -> RectShape:
        return self._rect(brick.shape.min, brick.shape.max, DARK_GRAY)