"""Configuration constants for the vocabulary round engine."""

# Timers
MOTION_TICK_SECONDS = 0.05    # Entity motion loop (20 Hz)
CLOCK_TICK_SECONDS = 1.0      # Round clock
SPAWN_INTERVAL_SECONDS = 2.0  # Trickle-style spawn timer

# Round defaults
DEFAULT_ROUND_SECONDS = 60
DEFAULT_FREQUENCY_MIN = 1
DEFAULT_FREQUENCY_MAX = 6000
OPTION_COUNT = 5              # Options shown per question, correct answer included
DISTRACTOR_COUNT = OPTION_COUNT - 1
ADVANCE_DELAY_TICKS = 1       # Motion ticks between a resolved question and the next draw

# Play area, in percent of width/height
PLAY_AREA_WIDTH = 100.0
EXIT_BOUNDARY_Y = 100.0
WIGGLE_AMPLITUDE = 2.0

# Scoring
CORRECT_REWARD = 10
WRONG_PENALTY = 5
MISS_PENALTY = 5
MATCHING_CORRECT_REWARD = 5
MATCHING_WRONG_PENALTY = 5

# Clock urgency bands (seconds remaining)
CLOCK_WARNING_SECONDS = 30
CLOCK_CRITICAL_SECONDS = 10

# Homograph rounds: options are the meanings sharing one unvocalized form
HOMOGRAPH_OPTION_COUNT = 3
HOMOGRAPH_MIN_GROUP = 2
