import os

from rdflib.namespace import XSD

# ---------- Namespaces ----------
RDF_BASE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
FIT_BASE = "http://example.org/fitness#"
FOAF_BASE = "http://xmlns.com/foaf/0.1/"
XSD_BASE = "http://www.w3.org/2001/XMLSchema#"
DC_BASE = "http://purl.org/dc/terms/"

# every conversion output declares these, even when the graph is empty
REQUIRED_PREFIXES = {
    "rdf": RDF_BASE,
    "fit": FIT_BASE,
    "foaf": FOAF_BASE,
    "xsd": XSD_BASE,
    "dc": DC_BASE,
}

# ---------- TCX ----------
TCX_NS = "http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2"
ACTIVITY_EXT_NS = "http://www.garmin.com/xmlschemas/ActivityExtension/v2"

# "" = no namespace, "*" = any namespace
TCX_LOOKUP = ("", TCX_NS, "*")

DEFAULT_SPORT = "Activity"

# ---------- Graph ----------
PERSON_NAME = "athlete1"
DEVICE_NAME = "device1"

PREDICATE_DATATYPES = {
    "heartRate": XSD.integer,
    "maxHeartRate": XSD.integer,
    "latitude": XSD.decimal,
    "longitude": XSD.decimal,
    "averageHeartRate": XSD.decimal,
    "powerOutput": XSD.float,
    "totalDistance": XSD.float,
    "totalPowerOutput": XSD.float,
    "duration": XSD.duration,
    "timestamp": XSD.dateTime,
}

TURTLE_FORMAT = "fitness-turtle"

# ---------- Outputs ----------
OUT_JSONLD = "activities.jsonld"
OUT_PYVIS = "activities.html"
OUT_CSV = "trackpoints.csv"
OUT_GPX = "activities.gpx"
MAPS_DIR = "maps"
PLOTS_DIR = "plots"

PYVIS_MAX_EDGES = 20000

# ---------- Logging ----------
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
