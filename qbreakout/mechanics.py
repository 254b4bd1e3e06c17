"""Physics and rules of the breakout game."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from enum import Enum

from .geometry import (
    AaBB,
    Circle,
    ContactSurface,
    Vec2,
    contact_circle_aabb,
    reflected_vector,
    vector_angle,
)

logger = logging.getLogger(__name__)

# The top left corner is 0/0; y grows downwards.
MODEL_GRID_LEN_X = 600.0
MODEL_GRID_LEN_Y = 600.0

CEILING_HEIGHT_Y = 0.0

SPACE_GRANULARITY = 0.001
TIME_GRANULARITY_SECONDS = 0.02

PANEL_LEN_X = 60.0
PANEL_LEN_Y = 10.0
PANEL_CENTER_POS_Y = MODEL_GRID_LEN_Y - 30.0
PANEL_MAX_SPEED_PER_SECOND = 160.0
PANEL_CONTROL_ACCEL_PER_SECOND = 20.0
# slow down when not accelerated
PANEL_SLOW_DOWN_ACCEL_PER_SECOND = 7.0

BRICK_EDGE_LEN = 25.0

BALL_RADIUS = 10.0
BALL_SPEED_PER_SEC = 200.0

BRICKS_SETUP_SPACING = 2.0
BRICKS_SETUP_ROWS = 3
BRICKS_SETUP_DISTANCE_LEFT_WALL = BALL_RADIUS * 3.0
BRICKS_SETUP_MIN_DISTANCE_RIGHT_WALL = BRICKS_SETUP_DISTANCE_LEFT_WALL
BRICKS_SETUP_FIRST_ROW_TOP_Y = 60.0

# maximum object distance at which a collision is detected
CONTACT_PREDICTION = 0.8
CONTACT_PENETRATION_LIMIT = 0.0


class PanelControl(Enum):
    NONE = 0
    ACCELERATE_LEFT = 1
    ACCELERATE_RIGHT = 2


@dataclass(frozen=True)
class GameInput:
    """Player input for one time step."""

    control: PanelControl = PanelControl.NONE
    exit: bool = False

    @classmethod
    def none(cls) -> GameInput:
        return cls(PanelControl.NONE, False)

    @classmethod
    def action(cls, control: PanelControl) -> GameInput:
        return cls(control, False)


@dataclass
class Brick:
    shape: AaBB


@dataclass
class ContactObjectSurface:
    """A contact surface, optionally belonging to the brick with ``brick_index``."""

    way: float
    approximation: float
    surface_normal: Vec2
    brick_index: int | None = None

    @classmethod
    def of(cls, surface: ContactSurface, brick_index: int | None = None) -> ContactObjectSurface:
        return cls(surface.way, surface.approximation, surface.surface_normal, brick_index)

    def surface(self) -> ContactSurface:
        return ContactSurface(self.way, self.approximation, self.surface_normal)


def _path_len(surface: ContactObjectSurface) -> float:
    return surface.way + surface.approximation


class ContactCandidates:
    """Collects contact surfaces and keeps those that are reached first."""

    def __init__(self) -> None:
        self.surfaces: list[ContactObjectSurface] = []

    def consider(self, candidate: ContactObjectSurface) -> None:
        if not -CONTACT_PENETRATION_LIMIT <= candidate.approximation <= CONTACT_PREDICTION:
            raise ValueError(f"contact approximation {candidate.approximation} out of range")
        self.surfaces.append(candidate)
        if len(self.surfaces) > 1:
            shortest = min(_path_len(s) for s in self.surfaces)
            self.surfaces = [
                s for s in self.surfaces if _path_len(s) <= shortest + SPACE_GRANULARITY
            ]

    def effective_collision_surface(self) -> ContactSurface | None:
        """The surface to reflect on; several hit surfaces are averaged."""
        if not self.surfaces:
            return None
        if len(self.surfaces) == 1:
            return self.surfaces[0].surface()
        count = len(self.surfaces)
        normal = Vec2()
        for s in self.surfaces:
            normal = normal + s.surface_normal
        return ContactSurface(
            way=sum(s.way for s in self.surfaces) / count,
            approximation=sum(s.approximation for s in self.surfaces) / count,
            surface_normal=normal.normalized(),
        )


def _moved_distance_after_collision(p: float, n1: Vec2, mv: Vec2) -> float:
    return p / (n1.dot(mv) / mv.length())


def _binary_search_first_contact(
    ball: Circle, move_vector: Vec2, start: float, end: float, aabb: AaBB
) -> ContactSurface:
    # a penetrating contact lies at `end`, so a non-penetrating one lies before it
    depth = 0
    while True:
        if depth > 10:
            logger.warning("binary_search_first_contact depth=%d", depth)
        m = (start + end) / 2.0
        contact = contact_circle_aabb(
            Circle(ball.center + move_vector * m, ball.radius), aabb, CONTACT_PREDICTION
        )
        if contact is None:
            start = m
        elif contact.dist < -CONTACT_PENETRATION_LIMIT:
            end = m
        else:
            return ContactSurface(move_vector.length() * m, contact.dist, contact.normal2)
        depth += 1


def _wall_way(move_vector: Vec2, distance: float, component: float) -> float:
    if component == 0.0:
        return 0.0
    return (move_vector * (distance / abs(component))).length()


@dataclass
class Ball:
    """A perfectly round ball."""

    shape: Circle
    direction: Vec2
    speed_per_sec: float

    def move_vector(self) -> Vec2:
        return self.direction.normalized() * (self.speed_per_sec * TIME_GRANULARITY_SECONDS)

    def collision_test_left_wall(self, move_vector: Vec2) -> ContactSurface | None:
        distance = self.shape.center.x - self.shape.radius
        if distance < 0.0:
            raise ValueError("ball is beyond the left wall")
        if distance + move_vector.x > 0.0:
            return None
        return ContactSurface(_wall_way(move_vector, distance, move_vector.x), 0.0, Vec2(1.0, 0.0))

    def collision_test_right_wall(self, move_vector: Vec2) -> ContactSurface | None:
        distance = MODEL_GRID_LEN_X - self.shape.center.x - self.shape.radius
        if distance < 0.0:
            raise ValueError("ball is beyond the right wall")
        if move_vector.x < distance:
            return None
        return ContactSurface(_wall_way(move_vector, distance, move_vector.x), 0.0, Vec2(-1.0, 0.0))

    def collision_test_top_wall(self, move_vector: Vec2) -> ContactSurface | None:
        distance = self.shape.center.y - self.shape.radius - CEILING_HEIGHT_Y
        if distance < 0.0:
            raise ValueError("ball is above the ceiling")
        if distance + move_vector.y > 0.0:
            return None
        return ContactSurface(_wall_way(move_vector, distance, move_vector.y), 0.0, Vec2(0.0, 1.0))

    def collision_check_with_rectangle(self, move_vector: Vec2, aabb: AaBB) -> ContactSurface | None:
        collision = self._find_non_penetrating_collision(move_vector, aabb)
        if collision is None:
            return None
        # only surfaces facing the movement count; otherwise the ball was already reflected
        if abs(vector_angle(move_vector, collision.surface_normal)) > math.pi / 2:
            return collision
        return None

    def _find_non_penetrating_collision(self, move_vector: Vec2, aabb: AaBB) -> ContactSurface | None:
        radius = self.shape.radius
        center = self.shape.center
        contact = contact_circle_aabb(Circle(center + move_vector, radius), aabb, CONTACT_PREDICTION)
        if contact is None:
            return None
        if contact.dist >= -CONTACT_PENETRATION_LIMIT:
            return ContactSurface(move_vector.length(), contact.dist, contact.normal2)

        x = _moved_distance_after_collision(abs(contact.dist), contact.normal1, move_vector)
        portion = 1.0 - x / move_vector.length()
        estimate = contact_circle_aabb(
            Circle(center + move_vector * portion, radius), aabb, CONTACT_PREDICTION
        )
        if estimate is None:
            logger.debug("estimated contact not there - performing binary search")
            return _binary_search_first_contact(self.shape, move_vector, portion, 1.0, aabb)
        if estimate.dist < -CONTACT_PENETRATION_LIMIT:
            logger.debug("estimated contact is still penetrating: dist=%s", estimate.dist)
            return _binary_search_first_contact(self.shape, move_vector, 0.0, portion, aabb)
        return ContactSurface(move_vector.length() * portion, estimate.dist, estimate.normal2)

    def check_bounds(self) -> None:
        """Raise ValueError if the ball is not inside the playing field."""
        c, r = self.shape.center, self.shape.radius
        if not (
            c.x - r >= 0.0
            and c.x + r <= MODEL_GRID_LEN_X
            and c.y - r >= 0.0
            and c.y + r <= MODEL_GRID_LEN_Y
        ):
            raise ValueError(f"ball out of bounds: {self.shape}")


@dataclass
class Panel:
    shape: AaBB
    speed_per_sec: float = 0.0

    def process_input(self, game_input: GameInput) -> None:
        """Compute the new panel speed from the input or slow down."""
        control = game_input.control
        if control is PanelControl.NONE:
            self.speed_per_sec = decrease_speed(self.speed_per_sec, PANEL_SLOW_DOWN_ACCEL_PER_SECOND)
        elif control is PanelControl.ACCELERATE_LEFT:
            self.speed_per_sec = accelerate(
                self.speed_per_sec, -PANEL_CONTROL_ACCEL_PER_SECOND, PANEL_MAX_SPEED_PER_SECOND
            )
        else:
            self.speed_per_sec = accelerate(
                self.speed_per_sec, PANEL_CONTROL_ACCEL_PER_SECOND, PANEL_MAX_SPEED_PER_SECOND
            )

    def proceed(self) -> None:
        """Move one time step forward, stopping at the walls."""
        potential = self.shape.translate(Vec2(self.speed_per_sec * TIME_GRANULARITY_SECONDS, 0.0))
        if potential.min.x <= 0.0:
            self.shape = potential.translate(Vec2(-potential.min.x, 0.0))
            self.speed_per_sec = 0.0
        elif potential.max.x >= MODEL_GRID_LEN_X:
            self.shape = potential.translate(Vec2(MODEL_GRID_LEN_X - potential.max.x, 0.0))
            self.speed_per_sec = 0.0
        else:
            self.shape = potential

    def check_bounds(self) -> None:
        """Raise ValueError if the panel is not inside the playing field."""
        s = self.shape
        if not (
            s.min.x >= 0.0
            and s.max.x <= MODEL_GRID_LEN_X
            and s.min.y >= 0.0
            and s.max.y <= MODEL_GRID_LEN_Y
        ):
            raise ValueError(f"panel out of bounds: {s}")


def _initial_bricks() -> list[Brick]:
    bricks = []
    for row in range(BRICKS_SETUP_ROWS):
        left_x = BRICKS_SETUP_DISTANCE_LEFT_WALL
        upper_y = BRICKS_SETUP_FIRST_ROW_TOP_Y + row * (BRICK_EDGE_LEN + BRICKS_SETUP_SPACING)
        while True:
            brick = Brick(
                AaBB(Vec2(left_x, upper_y - BRICK_EDGE_LEN), Vec2(left_x + BRICK_EDGE_LEN, upper_y))
            )
            if brick.shape.max.x >= MODEL_GRID_LEN_X - BRICKS_SETUP_MIN_DISTANCE_RIGHT_WALL:
                break
            left_x = brick.shape.max.x + BRICKS_SETUP_SPACING
            bricks.append(brick)
    return bricks


def _initial_ball() -> Ball:
    return Ball(
        shape=Circle(Vec2(MODEL_GRID_LEN_X * 0.5, MODEL_GRID_LEN_Y * 0.5), BALL_RADIUS),
        direction=Vec2(random.uniform(-0.35, -0.15), -1.0),
        speed_per_sec=BALL_SPEED_PER_SEC,
    )


def _initial_panel() -> Panel:
    return Panel(
        shape=AaBB(
            Vec2(MODEL_GRID_LEN_X / 2.0 - PANEL_LEN_X / 2.0, PANEL_CENTER_POS_Y - PANEL_LEN_Y / 2.0),
            Vec2(MODEL_GRID_LEN_X / 2.0 + PANEL_LEN_X / 2.0, PANEL_CENTER_POS_Y + PANEL_LEN_Y / 2.0),
        ),
        speed_per_sec=0.0,
    )


@dataclass
class BreakoutMechanics:
    """Complete game state; a fresh instance is the starting position."""

    bricks: list[Brick] = field(default_factory=_initial_bricks)
    ball: Ball = field(default_factory=_initial_ball)
    panel: Panel = field(default_factory=_initial_panel)
    finished: bool = False
    score: int = 0

    def time_step(self, game_input: GameInput) -> None:
        """Move the game physically one time step forward."""
        self.panel.proceed()
        self._proceed_ball_with(self.ball.move_vector())
        self._check_game_end_situation()
        if not self.finished:
            self.panel.process_input(game_input)

    def _check_game_end_situation(self) -> None:
        if self.ball.shape.center.y >= self.panel.shape.max.y or not self.bricks:
            self.finished = True

    def _proceed_ball_with(self, move_vector: Vec2) -> None:
        ball = self.ball
        while move_vector.length() >= SPACE_GRANULARITY:
            if ball.speed_per_sec <= 0.0:
                raise ValueError("ball speed must be positive")
            collisions = self._check_collisions(move_vector)

            hit = sorted(
                (s.brick_index for s in collisions.surfaces if s.brick_index is not None),
                reverse=True,
            )
            for idx in hit:
                del self.bricks[idx]
                self.score += 1

            collision = collisions.effective_collision_surface()
            if collision is None:
                ball.shape = Circle(ball.shape.center + move_vector, ball.shape.radius)
                return

            center = ball.shape.center + ball.direction * collision.way
            remaining = move_vector.length() - collision.way
            reflected = reflected_vector(ball.direction, collision.surface_normal).normalized()
            ball.shape = Circle(center, ball.shape.radius)
            ball.direction = reflected
            remaining_move = reflected * remaining
            logger.debug(
                "move_vector: %s, collision: %s, remaining_move_vector: %s",
                move_vector,
                collision,
                remaining_move,
            )
            if remaining_move.length() <= 0.0:
                return
            move_vector = remaining_move

    def _check_collisions(self, move_vector: Vec2) -> ContactCandidates:
        candidates = ContactCandidates()
        ball = self.ball
        for surface in (
            ball.collision_test_left_wall(move_vector),
            ball.collision_test_right_wall(move_vector),
            ball.collision_test_top_wall(move_vector),
            ball.collision_check_with_rectangle(move_vector, self.panel.shape),
        ):
            if surface is not None:
                candidates.consider(ContactObjectSurface.of(surface))
        for idx, brick in enumerate(self.bricks):
            surface = ball.collision_check_with_rectangle(move_vector, brick.shape)
            if surface is not None:
                candidates.consider(ContactObjectSurface.of(surface, idx))
        return candidates


def _granulate_speed(speed: float) -> float:
    scaled = abs(speed) * 1000.0
    return math.copysign(math.floor(scaled + 0.5), speed) / 1000.0


def decrease_speed(speed_per_sec: float, break_acceleration_per_sec: float) -> float:
    """Slow down by a positive braking amount."""
    if break_acceleration_per_sec < 0.0:
        raise ValueError("break acceleration must not be negative")
    if speed_per_sec > 0.0:
        return max(_granulate_speed(speed_per_sec - break_acceleration_per_sec), 0.0)
    if speed_per_sec < 0.0:
        return max(_granulate_speed(speed_per_sec + break_acceleration_per_sec), 0.0)
    return 0.0


def accelerate(speed_per_sec: float, acceleration_per_sec: float, speed_limit_abs: float) -> float:
    """Add a positive or negative acceleration, capped at the absolute speed limit."""
    if math.copysign(1.0, speed_limit_abs) < 0.0:
        raise ValueError("speed limit must not be negative")
    virtual = speed_per_sec + acceleration_per_sec
    if abs(virtual) > speed_limit_abs:
        virtual = math.copysign(speed_limit_abs, virtual)
    return _granulate_speed(virtual)