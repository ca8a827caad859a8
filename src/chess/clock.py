"""Game clock: a single countdown for the whole game. When it runs out, the game is over and starts afresh."""

from typing import Callable, Optional

DEFAULT_TIME_CONTROL = 600


class GameClock:
    def __init__(
        self,
        seconds: int = DEFAULT_TIME_CONTROL,
        on_expired: Optional[Callable[[], None]] = None,
    ) -> None:
        self.time_control = seconds
        self.remaining = seconds
        self.on_expired = on_expired

    def tick(self) -> None:
        """Called once per second by the host."""
        if self.remaining > 0:
            self.remaining -= 1
            return
        # NOTE the expiry hook is expected to start a new game (which resets this clock)
        if self.on_expired is not None:
            self.on_expired()
        self.reset()

    def reset(self) -> None:
        self.remaining = self.time_control

    def display(self) -> str:
        """minutes:seconds, ex. '9:05'"""
        minutes, seconds = divmod(self.remaining, 60)
        return f"{minutes}:{seconds:02d}"
