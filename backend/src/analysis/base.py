from typing import List


class BaseAnalyzer:
    def register(self, hooks):
        pass

    def print(self):
        pass

    def report(self):
        return {}


class BasePreprocessor:
    def preprocess_event(self, event):
        pass


class Window:
    def __init__(self, start, end=None):
        self.start = start
        self.end = end

    @property
    def duration(self):
        if self.end is None:
            return 0
        return self.end - self.start

    def contains(self, timestamp):
        if self.end is None:
            return self.start <= timestamp
        return self.start <= timestamp <= self.end

    def __repr__(self):
        return f"<Window start={self.start} end={self.end}>"


def range_overlap(a, b):
    return a[0] <= b[1] and b[0] <= a[1]


def combine_windows(windows: List[Window]) -> List[Window]:
    """Merge overlapping windows, all windows must be closed"""
    combined = []

    for window in sorted(windows, key=lambda w: w.start):
        if combined and window.start <= combined[-1].end:
            combined[-1].end = max(combined[-1].end, window.end)
        else:
            combined.append(Window(window.start, window.end))
    return combined


def clamp_windows(windows: List[Window], start, end) -> List[Window]:
    clamped_windows = []

    for window in windows:
        window_end = end if window.end is None else window.end
        if not range_overlap((window.start, window_end), (start, end)):
            continue
        clamped_windows.append(Window(max(window.start, start), min(window_end, end)))

    return clamped_windows


def subtract_windows(windows: List[Window], excluded: List[Window]) -> List[Window]:
    """Remove the excluded time from closed windows"""
    remaining = combine_windows(windows)

    for excluded_window in combine_windows(excluded):
        pieces = []
        for window in remaining:
            if not range_overlap(
                (window.start, window.end), (excluded_window.start, excluded_window.end)
            ):
                pieces.append(window)
                continue
            if window.start < excluded_window.start:
                pieces.append(Window(window.start, excluded_window.start))
            if excluded_window.end < window.end:
                pieces.append(Window(excluded_window.end, window.end))
        remaining = pieces

    return remaining


def total_duration(windows: List[Window]):
    return sum(window.duration for window in combine_windows(windows))
