import logging
from typing import List, Optional

from analysis.base import (
    BaseAnalyzer,
    BasePreprocessor,
    Window,
    clamp_windows,
    subtract_windows,
    total_duration,
)
from report import Fight


class StatusWindows:
    def __init__(self, status_id, target_id):
        self.status_id = status_id
        self.target_id = target_id
        self._windows = []

    @property
    def has_window(self):
        return len(self._windows) > 0

    @property
    def has_active_window(self):
        return self.has_window and self._windows[-1].end is None

    @property
    def active_window(self):
        if not self.has_window:
            return None
        return self._windows[-1]

    @property
    def windows(self):
        return self._windows

    def add_window(self, start, end=None):
        self._windows.append(Window(start, end))

    def contains(self, timestamp):
        for window in self._windows:
            if window.contains(timestamp):
                return True
        return False


class StatusTracker(BasePreprocessor):
    """Status windows (buffs and debuffs) per target entity"""

    APPLY_TYPES = ("applybuff", "applydebuff")
    REFRESH_TYPES = ("refreshbuff", "refreshdebuff", "removebuffstack", "removedebuffstack")
    REMOVE_TYPES = ("removebuff", "removedebuff")

    def __init__(self, end_time, starting_auras=None):
        self._end_time = end_time
        self._status_windows = {}
        self._add_starting_auras(starting_auras or [])

    def _get_status_windows(self, target_id, status_id):
        return self._status_windows.setdefault(
            (target_id, status_id),
            StatusWindows(status_id, target_id),
        )

    def _add_starting_auras(self, starting_auras):
        for aura in starting_auras:
            windows = self._get_status_windows(aura["targetID"], aura["abilityGameID"])
            if not windows.has_window:
                windows.add_window(0)

    def preprocess_event(self, event):
        if event["type"] not in self.APPLY_TYPES + self.REFRESH_TYPES + self.REMOVE_TYPES:
            return

        windows = self._get_status_windows(event["targetID"], event["abilityGameID"])

        if event["type"] in self.REFRESH_TYPES:
            # If we don't have a window, assume it was a starting aura
            if not windows.has_window:
                windows.add_window(0)
        elif event["type"] in self.APPLY_TYPES:
            if not windows.has_active_window:
                windows.add_window(event["timestamp"])
        elif event["type"] in self.REMOVE_TYPES:
            end = event["timestamp"]
            if windows.has_active_window:
                windows.active_window.end = end
            elif not windows.has_window:  # assume it was a starting aura
                windows.add_window(0, end)

    def get_windows(self, status_id, target_id) -> List[Window]:
        windows = self._status_windows.get((target_id, status_id))
        if not windows:
            return []
        return clamp_windows(windows.windows, 0, self._end_time)

    def has_status(self, target_id, status_id, timestamp):
        windows = self._status_windows.get((target_id, status_id))
        if not windows:
            return False
        return windows.contains(timestamp)

    def get_status_uptime(self, status_id, entity_ids, exclude: List[Window] = ()) -> int:
        windows = []
        for entity_id in entity_ids:
            windows.extend(self.get_windows(status_id, entity_id))
        return total_duration(subtract_windows(windows, list(exclude)))


class InvulnerabilityTracker(BasePreprocessor):
    """Tracks the windows during which the bosses are untargetable"""

    def __init__(self, fight: Fight):
        self._fight = fight
        self._windows_by_actor = {}

    def _is_enemy(self, actor_id):
        if self._fight.boss_ids:
            return actor_id in self._fight.boss_ids
        return actor_id != self._fight.source.id and actor_id not in self._fight.source.pets

    def _start(self, actor_id, timestamp):
        windows = self._windows_by_actor.setdefault(actor_id, [])
        if not windows or windows[-1].end is not None:
            windows.append(Window(timestamp))

    def _end(self, actor_id, timestamp):
        windows = self._windows_by_actor.setdefault(actor_id, [])
        if windows and windows[-1].end is None:
            windows[-1].end = timestamp
        elif not windows:
            # untargetable from the pull
            windows.append(Window(0, timestamp))

    def preprocess_event(self, event):
        if event["type"] != "targetabilityupdate":
            return

        actor_id = event.get("sourceID")
        if not self._is_enemy(actor_id):
            return
        if event.get("targetable"):
            self._end(actor_id, event["timestamp"])
        else:
            self._start(actor_id, event["timestamp"])

    def get_invulnerable_windows(self) -> List[Window]:
        windows = [
            window
            for actor_windows in self._windows_by_actor.values()
            for window in actor_windows
        ]
        return clamp_windows(windows, 0, self._fight.duration)

    def get_invulnerable_uptime(self) -> int:
        return total_duration(self.get_invulnerable_windows())


class Combatants:
    def __init__(self, fight: Fight, status_tracker: StatusTracker):
        self._fight = fight
        self._status_tracker = status_tracker

    @property
    def selected_id(self):
        return self._fight.source.id

    def get_entities(self):
        return [self._fight.source.id, *self._fight.source.pets]

    def has_status(self, status_id, timestamp, entity_id: Optional[int] = None):
        if entity_id is None:
            entity_id = self.selected_id
        return self._status_tracker.has_status(entity_id, status_id, timestamp)


class CoreAnalysisConfig:
    def create_status_tracker(self, fight: Fight) -> StatusTracker:
        return StatusTracker(fight.duration, fight.source.starting_auras)

    def create_invulnerability_tracker(self, fight: Fight) -> InvulnerabilityTracker:
        return InvulnerabilityTracker(fight)

    def get_analyzers(
        self, fight: Fight, combatants, entity_statuses, invuln, data, sink
    ) -> List[BaseAnalyzer]:
        logging.info(f"No job specific analysis for {fight.source.name}")
        return []
