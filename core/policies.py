"""Per-game-mode policy: scoring constants and spawn behaviour.

All game types share one round engine and differ only in these values.
"""

from dataclasses import dataclass

from .config import (
    CORRECT_REWARD, WRONG_PENALTY, MISS_PENALTY,
    MATCHING_CORRECT_REWARD, MATCHING_WRONG_PENALTY,
    OPTION_COUNT, HOMOGRAPH_OPTION_COUNT
)
from .errors import ConfigurationError

SPAWN_WAVE = 'wave'        # all options at once, evenly spaced, moving
SPAWN_TRICKLE = 'trickle'  # one option per spawn tick, capped on screen
SPAWN_GRID = 'grid'        # all options at once, stationary


@dataclass(frozen=True)
class ModePolicy:
    name: str
    correct_reward: int
    wrong_penalty: int
    miss_penalty: int
    advance_on_wrong: bool
    spawn_style: str
    speed: tuple = (0.0, 0.0)   # per-tick vertical speed range, percent of height
    max_on_screen: int = OPTION_COUNT
    option_count: int = OPTION_COUNT
    homographs: bool = False    # pool narrowed to shared unvocalized forms

    @property
    def distractor_count(self) -> int:
        return self.option_count - 1


BALLOON = ModePolicy(
    name='balloon',
    correct_reward=CORRECT_REWARD,
    wrong_penalty=WRONG_PENALTY,
    miss_penalty=MISS_PENALTY,
    advance_on_wrong=False,
    spawn_style=SPAWN_WAVE,
    speed=(0.3, 0.4),
)

FALLING = ModePolicy(
    name='falling',
    correct_reward=CORRECT_REWARD,
    wrong_penalty=WRONG_PENALTY,
    miss_penalty=MISS_PENALTY,
    advance_on_wrong=True,
    spawn_style=SPAWN_TRICKLE,
    speed=(0.5, 0.7),
    max_on_screen=3,
)

MATCHING = ModePolicy(
    name='matching',
    correct_reward=MATCHING_CORRECT_REWARD,
    wrong_penalty=MATCHING_WRONG_PENALTY,
    miss_penalty=0,
    advance_on_wrong=False,
    spawn_style=SPAWN_GRID,
)

# Shows one vocalized form; the player picks its meaning among the meanings
# of the other words written the same way without vowels
VOCALIZING_HOMOGRAPH = ModePolicy(
    name='vocalizing-homograph',
    correct_reward=CORRECT_REWARD,
    wrong_penalty=WRONG_PENALTY,
    miss_penalty=0,
    advance_on_wrong=False,
    spawn_style=SPAWN_GRID,
    max_on_screen=HOMOGRAPH_OPTION_COUNT,
    option_count=HOMOGRAPH_OPTION_COUNT,
    homographs=True,
)

POLICIES = {p.name: p for p in (BALLOON, FALLING, MATCHING, VOCALIZING_HOMOGRAPH)}


def get_policy(game_type: str) -> ModePolicy:
    try:
        return POLICIES[game_type]
    except KeyError:
        raise ConfigurationError(f"Unknown game type: {game_type}") from None
