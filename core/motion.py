"""Entity motion loop: moves on-screen answers and reports boundary exits."""

import itertools
import logging
import math
import random

from .config import EXIT_BOUNDARY_Y, MOTION_TICK_SECONDS, PLAY_AREA_WIDTH, WIGGLE_AMPLITUDE

logger = logging.getLogger(__name__)

_entity_ids = itertools.count(1)


class AnswerEntity:
    """A candidate answer drifting across the play area."""

    def __init__(self, label: str, x: float, y: float = 0.0, vx: float = 0.0, vy: float = 0.0,
                 spawn_tick: int = 0, phase: float = 0.0, wiggle: bool = True):
        self.id = f"e{next(_entity_ids)}"
        self.label = label
        self.base_x = x
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.spawn_tick = spawn_tick
        self.phase = phase
        self.wiggle = wiggle

    def advance(self, tick: int) -> None:
        self.y += self.vy
        self.base_x += self.vx
        if self.wiggle:
            t = tick * MOTION_TICK_SECONDS
            self.x = self.base_x + math.sin(t + self.phase) * WIGGLE_AMPLITUDE
        else:
            self.x = self.base_x

    def has_exited(self, boundary: float = EXIT_BOUNDARY_Y) -> bool:
        return self.y >= boundary

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'label': self.label,
            'x': round(self.x, 2),
            'y': round(self.y, 2),
        }


class MotionLoop:
    """Owns the live entities and advances them one fixed tick at a time."""

    def __init__(self, boundary: float = EXIT_BOUNDARY_Y, rng: random.Random | None = None):
        self.boundary = boundary
        self.rng = rng or random.Random()
        self.entities: dict[str, AnswerEntity] = {}
        self.tick_count = 0
        self.frozen = False

    def __len__(self) -> int:
        return len(self.entities)

    def get(self, entity_id: str) -> AnswerEntity | None:
        return self.entities.get(entity_id)

    def add(self, entity: AnswerEntity) -> AnswerEntity:
        entity.spawn_tick = self.tick_count
        self.entities[entity.id] = entity
        return entity

    def remove(self, entity_id: str) -> AnswerEntity | None:
        return self.entities.pop(entity_id, None)

    def clear(self) -> None:
        self.entities.clear()

    def freeze(self) -> None:
        self.frozen = True

    def spawn_row(self, labels: list[str], speed: tuple[float, float], wiggle: bool = True) -> list[AnswerEntity]:
        """Spawn one entity per label, evenly spaced across the width."""
        gap = PLAY_AREA_WIDTH / (len(labels) + 1)
        spawned = []
        for index, label in enumerate(labels):
            entity = AnswerEntity(
                label,
                x=(index + 1) * gap,
                vy=self.rng.uniform(*speed) if speed[1] > 0 else 0.0,
                phase=self.rng.random() * 2 * math.pi,
                wiggle=wiggle,
            )
            spawned.append(self.add(entity))
        return spawned

    def spawn_one(self, label: str, speed: tuple[float, float]) -> AnswerEntity:
        """Spawn a single entity at a random column along the top edge."""
        entity = AnswerEntity(
            label,
            x=self.rng.random() * (PLAY_AREA_WIDTH - 10),
            vy=self.rng.uniform(*speed),
            phase=self.rng.random() * 2 * math.pi,
            wiggle=False,
        )
        return self.add(entity)

    def step(self) -> list[AnswerEntity]:
        """Advance every entity one tick; remove and return those that exited."""
        if self.frozen:
            return []
        self.tick_count += 1
        exited = []
        for entity in list(self.entities.values()):
            entity.advance(self.tick_count)
            if entity.has_exited(self.boundary):
                exited.append(entity)
                del self.entities[entity.id]
        if exited:
            logger.debug(f"Tick {self.tick_count}: {len(exited)} entities exited")
        return exited

    def to_list(self) -> list[dict]:
        return [e.to_dict() for e in self.entities.values()]
