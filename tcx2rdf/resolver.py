"""Namespace-tolerant element lookup for TCX documents.

Exporters disagree on how they qualify element names: some omit the
namespace, most use the TrainingCenterDatabase default namespace, and the
TPX power extension shows up under several namespaces. Every lookup here
tries an ordered list of spellings and takes the first one present.
"""

import math

from .config import TCX_LOOKUP, TCX_NS, ACTIVITY_EXT_NS


# ---------- Tag spellings ----------
def candidate_tags(local, namespaces=TCX_LOOKUP):
    tags = []
    for ns in namespaces:
        if ns == "":
            tags.append(local)
        elif ns == "*":
            tags.append("{*}" + local)
        else:
            tags.append("{%s}%s" % (ns, local))
    return tags


def local_name(tag):
    return tag.rsplit("}", 1)[-1]


def find_child(element, local, namespaces=TCX_LOOKUP):
    if element is None:
        return None
    for tag in candidate_tags(local, namespaces):
        found = element.find(tag)
        if found is not None:
            return found
    return None


def find_children(element, local, namespaces=TCX_LOOKUP):
    if element is None:
        return []
    for tag in candidate_tags(local, namespaces):
        found = element.findall(tag)
        if found:
            return found
    return []


def child_text(element, local, namespaces=TCX_LOOKUP):
    found = find_child(element, local, namespaces)
    if found is None or found.text is None:
        return None
    text = found.text.strip()
    return text or None


def to_number(text):
    """Float value of ``text``; NaN when it is missing or not numeric."""
    if text is None:
        return math.nan
    try:
        return float(text)
    except (TypeError, ValueError):
        return math.nan


# ---------- Accessors ----------
def child_path(*steps):
    """Accessor walking ``(local, namespaces)`` steps down to a leaf's text."""
    def accessor(element):
        node = element
        for local, namespaces in steps:
            node = find_child(node, local, namespaces)
            if node is None:
                return None
        return node.text
    return accessor


class FieldResolver:
    """Ordered candidate accessors for one logical field."""

    def __init__(self, name, accessors):
        self.name = name
        self.accessors = list(accessors)

    def resolve(self, element):
        for accessor in self.accessors:
            value = accessor(element)
            if value is not None and value.strip():
                return value.strip()
        return None

    def resolve_number(self, element):
        return to_number(self.resolve(element))

    def __repr__(self):
        return f"FieldResolver({self.name!r}, {len(self.accessors)} candidates)"


def _power_spelling(ns):
    return child_path(("Extensions", TCX_LOOKUP), ("TPX", (ns,)), ("Watts", (ns,)))


# plain first, then the namespaces exporters are known to use, then anything
POWER_OUTPUT = FieldResolver("powerOutput", [
    _power_spelling(""),
    _power_spelling(ACTIVITY_EXT_NS),
    _power_spelling(TCX_NS),
    _power_spelling("*"),
])

HEART_RATE = FieldResolver("heartRate", [
    child_path(("HeartRateBpm", TCX_LOOKUP), ("Value", TCX_LOOKUP)),
])

LATITUDE = FieldResolver("latitude", [child_path(("LatitudeDegrees", TCX_LOOKUP))])
LONGITUDE = FieldResolver("longitude", [child_path(("LongitudeDegrees", TCX_LOOKUP))])

# lap level
AVERAGE_HEART_RATE = FieldResolver("averageHeartRate", [
    child_path(("AverageHeartRateBpm", TCX_LOOKUP), ("Value", TCX_LOOKUP)),
])
MAXIMUM_HEART_RATE = FieldResolver("maxHeartRate", [
    child_path(("MaximumHeartRateBpm", TCX_LOOKUP), ("Value", TCX_LOOKUP)),
])
TOTAL_TIME_SECONDS = FieldResolver("totalTimeSeconds", [child_path(("TotalTimeSeconds", TCX_LOOKUP))])
DISTANCE_METERS = FieldResolver("distanceMeters", [child_path(("DistanceMeters", TCX_LOOKUP))])
