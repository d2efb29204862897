"""TCX (Training Center XML) reader.

Turns a workout document into plain dicts, one per activity, with laps and
trackpoints in document order. Structural gaps raise ``MalformedInput``;
missing numbers become NaN and are left for the graph to carry.
"""

import xml.etree.ElementTree as ET

from loguru import logger

from .config import DEFAULT_SPORT
from .errors import MalformedInput, TcxParseError
from .resolver import (
    AVERAGE_HEART_RATE,
    DISTANCE_METERS,
    HEART_RATE,
    LATITUDE,
    LONGITUDE,
    MAXIMUM_HEART_RATE,
    POWER_OUTPUT,
    TOTAL_TIME_SECONDS,
    child_text,
    find_child,
    find_children,
    local_name,
)


# ---------- Parse ----------
def _clean(tcx_text):
    # a BOM or blank line before the XML declaration trips expat
    if isinstance(tcx_text, bytes):
        if tcx_text.startswith(b"\xef\xbb\xbf"):
            tcx_text = tcx_text[3:]
        return tcx_text.lstrip()
    return tcx_text.lstrip("\ufeff").lstrip()


def parse_tcx(tcx_text):
    try:
        root = ET.fromstring(_clean(tcx_text))
    except ET.ParseError as e:
        raise TcxParseError(f"TCX document is not well-formed: {e}") from e

    if local_name(root.tag) != "TrainingCenterDatabase":
        raise MalformedInput(f"expected TrainingCenterDatabase root, found {local_name(root.tag)}")

    activities_el = find_child(root, "Activities")
    if activities_el is None:
        raise MalformedInput("document has no Activities element")

    activities = [
        parse_activity(el, ai)
        for ai, el in enumerate(find_children(activities_el, "Activity"))
    ]
    logger.debug(f"Parsed {len(activities)} activities")
    return activities


def parse_activity(activity_el, index):
    laps_el = find_children(activity_el, "Lap")
    if not laps_el:
        raise MalformedInput("activity has no Lap elements", activity=index)
    return {
        "index": index,
        "sport": activity_el.get("Sport") or DEFAULT_SPORT,
        # the Id of a TCX activity is its start time
        "id": child_text(activity_el, "Id"),
        "laps": [parse_lap(el, index, li) for li, el in enumerate(laps_el)],
    }


def parse_lap(lap_el, activity_index, index):
    trackpoints = []
    for track_el in find_children(lap_el, "Track"):
        for tp_el in find_children(track_el, "Trackpoint"):
            trackpoints.append(parse_trackpoint(tp_el, activity_index, index, len(trackpoints)))
    return {
        "index": index,
        "start_time": lap_el.get("StartTime"),
        "average_heart_rate": AVERAGE_HEART_RATE.resolve_number(lap_el),
        "maximum_heart_rate": MAXIMUM_HEART_RATE.resolve_number(lap_el),
        "total_time_seconds": TOTAL_TIME_SECONDS.resolve_number(lap_el),
        "distance_meters": DISTANCE_METERS.resolve_number(lap_el),
        "trackpoints": trackpoints,
    }


def parse_trackpoint(tp_el, activity_index, lap_index, index):
    time = child_text(tp_el, "Time")
    if time is None:
        raise MalformedInput("trackpoint has no Time", activity=activity_index, lap=lap_index, trackpoint=index)
    position = find_child(tp_el, "Position")
    if position is None:
        raise MalformedInput("trackpoint has no Position", activity=activity_index, lap=lap_index, trackpoint=index)
    return {
        "index": index,
        "time": time,
        "latitude": LATITUDE.resolve_number(position),
        "longitude": LONGITUDE.resolve_number(position),
        "heart_rate": HEART_RATE.resolve_number(tp_el),
        "power": POWER_OUTPUT.resolve_number(tp_el),
    }


def activity_trackpoints(laps):
    """Every trackpoint of every lap, in document order."""
    tps = []
    for lap in laps:
        tps.extend(lap["trackpoints"])
    return tps
