"""
App state tracking

Turns host app-state transitions (active / inactive / background) into
app_foregrounded and app_backgrounded events.
"""

import re

from .events import ProductEvents

INACTIVE_STATES = re.compile(r"inactive|background")


class AppStateTracker:
    """Feed it every app-state change the host reports"""

    def __init__(self, events: ProductEvents, initial_state: str = "active"):
        self.events = events
        self.app_state = initial_state

    def handle_change(self, next_state: str):
        if INACTIVE_STATES.match(self.app_state) and next_state == "active":
            self.events.app_foregrounded()
        elif self.app_state == "active" and INACTIVE_STATES.match(next_state):
            self.events.app_backgrounded()
        self.app_state = next_state
