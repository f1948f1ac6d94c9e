"""
lightweight latency profiler for the drawing pipeline.

tracks how long each stage (resolve, sample, render) takes per pointer
event. a pointer event has to be fully handled before the next one
arrives or the stroke lags behind the pen, so this is what to look at
when drawing feels sluggish. off by default.

usage:
    profiler = Profiler()
    profiler.begin_event()
    profiler.start("resolve")
    ...snap the point...
    profiler.stop("resolve")
    profiler.end_event()

    profiler.report()
"""
import time
import math
from collections import defaultdict, deque


def _percentile(sorted_data, p):
    """compute the pth percentile from a pre-sorted list"""
    if not sorted_data:
        return 0.0
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = math.floor(k)
    c = math.ceil(k)
    if f == c:
        return sorted_data[int(k)]
    return sorted_data[int(f)] * (c - k) + sorted_data[int(c)] * (k - f)


class Profiler:
    """
    wall-clock time for named stages of each pointer event, over a
    rolling window of the last N events. p50/p95/p99 are what matter,
    one slow event is a visible hitch in the line.
    """

    def __init__(self, window_size=500, enabled=True):
        self.enabled = enabled
        self._window = window_size

        self._active = {}                                  # stage -> start time
        self._stage_times = defaultdict(lambda: deque(maxlen=self._window))
        self._event_times = deque(maxlen=window_size)
        self._event_start = None
        self.event_count = 0
        self._peaks = defaultdict(float)

    def start(self, stage):
        if not self.enabled:
            return
        self._active[stage] = time.perf_counter()

    def stop(self, stage):
        if not self.enabled or stage not in self._active:
            return
        elapsed = time.perf_counter() - self._active.pop(stage)
        self._stage_times[stage].append(elapsed)
        if elapsed > self._peaks[stage]:
            self._peaks[stage] = elapsed

    def begin_event(self):
        if not self.enabled:
            return
        self._event_start = time.perf_counter()

    def end_event(self):
        if not self.enabled or self._event_start is None:
            return
        self._event_times.append(time.perf_counter() - self._event_start)
        self.event_count += 1
        self._event_start = None

    def stage_avg_ms(self, stage):
        times = self._stage_times.get(stage)
        if not times:
            return 0.0
        return (sum(times) / len(times)) * 1000

    def stage_percentiles(self, stage):
        """p50, p95, p99 in ms"""
        times = self._stage_times.get(stage)
        if not times:
            return 0.0, 0.0, 0.0
        sorted_ms = sorted(t * 1000 for t in times)
        return (_percentile(sorted_ms, 50), _percentile(sorted_ms, 95),
                _percentile(sorted_ms, 99))

    def event_percentiles(self):
        if not self._event_times:
            return 0.0, 0.0, 0.0
        sorted_ms = sorted(t * 1000 for t in self._event_times)
        return (_percentile(sorted_ms, 50), _percentile(sorted_ms, 95),
                _percentile(sorted_ms, 99))

    def summary_dict(self):
        p50, p95, p99 = self.event_percentiles()
        data = {
            "events": self.event_count,
            "event_p50_ms": round(p50, 3),
            "event_p95_ms": round(p95, 3),
            "event_p99_ms": round(p99, 3),
            "stages": {},
        }
        for stage, times in self._stage_times.items():
            if not times:
                continue
            s50, s95, s99 = self.stage_percentiles(stage)
            data["stages"][stage] = {
                "avg_ms": round(self.stage_avg_ms(stage), 3),
                "p50_ms": round(s50, 3),
                "p95_ms": round(s95, 3),
                "p99_ms": round(s99, 3),
                "peak_ms": round(self._peaks[stage] * 1000, 3),
            }
        return data

    def report(self):
        """print a summary table"""
        if not self._event_times:
            print("no profiling data yet")
            return

        p50, p95, p99 = self.event_percentiles()
        print()
        print(f"  POINTER PIPELINE ({len(self._event_times)} events)")
        print(f"  {'─' * 56}")
        print(f"  {'Stage':<14} {'Avg ms':>8} {'p50':>8} {'p95':>8} {'p99':>8}")
        print(f"  {'─' * 56}")
        for stage in sorted(self._stage_times):
            s50, s95, s99 = self.stage_percentiles(stage)
            print(f"  {stage:<14} {self.stage_avg_ms(stage):>8.3f} {s50:>8.3f} {s95:>8.3f} {s99:>8.3f}")
        print(f"  {'─' * 56}")
        print(f"  {'EVENT':<14} {'':>8} {p50:>8.3f} {p95:>8.3f} {p99:>8.3f}")
        print()
