"""TCX -> RDF conversion driver.

One call is one run: it gets a fresh ``RunContext`` so concurrent
conversions in the same process never share counters or graphs.
"""

import math

from loguru import logger
from rdflib import Literal
from rdflib.namespace import XSD

from . import aggregation
from .graph import DC, DEVICE, FIT, PERSON, RunContext
from .serializer import serialize_graph
from .tcx import activity_trackpoints, parse_tcx


# ---------- Entrypoints ----------
def convert_tcx_to_graph(tcx_text):
    activities = parse_tcx(tcx_text)
    ctx = RunContext()
    ctx.add_fixed_entities()
    for activity in activities:
        handle_activity(ctx, activity)
    logger.info(
        f"Converted {len(activities)} activities, "
        f"{ctx.trackpoint_no - 1} trackpoints, {len(ctx.graph)} triples"
    )
    return ctx.graph


def convert_tcx_to_ttl(tcx_text):
    return serialize_graph(convert_tcx_to_graph(tcx_text))


# ---------- Activities ----------
def activity_title(sport, activity_id):
    if activity_id:
        return f"{sport} activity on {activity_id[:10]}"
    return f"{sport} activity"


def handle_activity(ctx, activity):
    sport = activity["sport"]
    laps = activity["laps"]
    node = ctx.new_activity(sport)
    logger.debug(f"Activity {node} ({sport}, {len(laps)} laps)")

    ctx.add_triple(node, FIT.performedBy, PERSON)
    ctx.add_triple(node, DC.title, Literal(activity_title(sport, activity["id"])))
    if activity["id"]:
        ctx.add_triple(node, DC.created, Literal(activity["id"], datatype=XSD.dateTime, normalize=False))

    avg_hr = aggregation.average_heart_rate(laps)
    if math.isnan(avg_hr):
        logger.warning(f"{node}: average heart rate is NaN (no lap time or missing lap values)")
    ctx.add_measure(node, "averageHeartRate", avg_hr)
    ctx.add_measure(node, "maxHeartRate", aggregation.max_heart_rate(laps))
    ctx.add_measure(node, "duration", aggregation.format_duration(aggregation.total_duration_seconds(laps)))
    ctx.add_measure(node, "totalDistance", aggregation.total_distance(laps))

    trackpoints = activity_trackpoints(laps)
    power = aggregation.total_power_output(trackpoints)
    if power is not None:
        ctx.add_measure(node, "totalPowerOutput", power)

    for tp in trackpoints:
        handle_trackpoint(ctx, node, tp)
    return node


# ---------- Trackpoints ----------
def handle_trackpoint(ctx, activity_node, trackpoint):
    tp_node = ctx.new_trackpoint()
    ctx.add_triple(activity_node, FIT.hasTrackpoint, tp_node)

    sd_node = ctx.new_sensor_data()
    ctx.add_triple(tp_node, FIT.hasSensorData, sd_node)
    ctx.add_measure(sd_node, "latitude", trackpoint["latitude"])
    ctx.add_measure(sd_node, "longitude", trackpoint["longitude"])
    ctx.add_measure(sd_node, "heartRate", trackpoint["heart_rate"])
    ctx.add_measure(sd_node, "powerOutput", trackpoint["power"])

    ctx.add_triple(tp_node, FIT.recordedBy, DEVICE)
    ctx.add_measure(tp_node, "timestamp", trackpoint["time"])
    return tp_node
