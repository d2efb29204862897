"""Activity-level metrics computed from laps and trackpoints.

NaN inputs are not filtered out: a missing lap figure or power reading
makes the affected aggregate NaN, and the graph emits it as such.
"""

import math


def average_heart_rate(laps):
    """Time-weighted mean of lap average heart rates; NaN if no time was recorded."""
    total_beats = 0.0
    total_time = 0.0
    for lap in laps:
        total_beats += lap["average_heart_rate"] * lap["total_time_seconds"]
        total_time += lap["total_time_seconds"]
    if total_time == 0:
        return math.nan
    return total_beats / total_time


def max_heart_rate(laps):
    # -1 survives when there are no laps; NaN never compares greater
    best = -1
    for lap in laps:
        if lap["maximum_heart_rate"] > best:
            best = lap["maximum_heart_rate"]
    return best


def total_duration_seconds(laps):
    return sum(lap["total_time_seconds"] for lap in laps)


def format_duration(seconds):
    """Interval string ``PT<h>H<m>M<s>S`` with zero components left out.

    Rounds half up; negative and non-numeric input count as 0. Zero
    seconds gives the bare ``PT``.
    """
    try:
        seconds = float(seconds)
    except (TypeError, ValueError):
        seconds = 0.0
    if math.isnan(seconds) or math.isinf(seconds):
        seconds = 0.0
    seconds = max(0, math.floor(seconds + 0.5))
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    return "PT" + (f"{h}H" if h else "") + (f"{m}M" if m else "") + (f"{s}S" if s else "")


def total_distance(laps):
    return sum(lap["distance_meters"] for lap in laps)


def total_power_output(trackpoints):
    """Mean power over an activity's trackpoints.

    The first trackpoint's reading is skipped in the sum but still counted
    in the divisor, so [100, 150, 200] gives 350 / 3. Returns None for
    fewer than two trackpoints.
    """
    n = len(trackpoints)
    if n < 2:
        return None
    total = 0.0
    for tp in trackpoints[1:]:
        total += tp["power"]
    return total / n
