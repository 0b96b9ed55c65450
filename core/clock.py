"""Round clock: one-second countdown."""

from .config import CLOCK_CRITICAL_SECONDS, CLOCK_WARNING_SECONDS, DEFAULT_ROUND_SECONDS


class RoundClock:
    """Counts down whole seconds. Never pauses; only freezes at round end."""

    def __init__(self, duration: int = DEFAULT_ROUND_SECONDS):
        if duration <= 0:
            raise ValueError("Round duration must be positive")
        self.duration = duration
        self.remaining = duration
        self.ticks = 0
        self.frozen = False

    @property
    def expired(self) -> bool:
        return self.remaining <= 0

    def tick(self) -> bool:
        """Advance one second. Returns True on the tick that reaches zero."""
        if self.frozen or self.expired:
            return False
        self.remaining -= 1
        self.ticks += 1
        return self.remaining <= 0

    def freeze(self) -> None:
        self.frozen = True

    def urgency(self) -> str:
        if self.remaining > CLOCK_WARNING_SECONDS:
            return 'calm'
        if self.remaining > CLOCK_CRITICAL_SECONDS:
            return 'warning'
        return 'critical'
