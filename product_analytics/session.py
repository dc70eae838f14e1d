"""
Session and screen tracking

Records session start, a two-deep screen history (current, previous) and
named start marks used for durations (onboarding, paywall, background).
"""

import threading
import time
from typing import Callable, Dict, Optional, Tuple


class SessionTracker:
    """Session start time, screen history and named timers"""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self.started_at: Optional[float] = None
        self.current_screen: Optional[str] = None
        self.previous_screen: Optional[str] = None
        self._marks: Dict[str, float] = {}

    def start(self):
        """Start (or restart) the session clock"""
        self.started_at = self._clock()

    def rotate_screen(self, screen_name: str) -> Tuple[str, Optional[str]]:
        """
        Record a screen view

        Returns:
            (current, previous) after rotation
        """
        with self._lock:
            self.previous_screen = self.current_screen
            self.current_screen = screen_name
            return self.current_screen, self.previous_screen

    def clear_screens(self):
        with self._lock:
            self.current_screen = None
            self.previous_screen = None

    def session_duration(self) -> int:
        """Seconds since session start, 0 if no session"""
        if self.started_at is None:
            return 0
        return round(self._clock() - self.started_at)

    def mark(self, name: str):
        self._marks[name] = self._clock()

    def elapsed(self, name: str) -> int:
        """Seconds since mark(name), 0 if never marked"""
        started = self._marks.get(name)
        if started is None:
            return 0
        return round(self._clock() - started)
