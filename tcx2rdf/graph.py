"""Per-run RDF graph with allocated activity, trackpoint and sensor-data nodes."""

import math

import numpy as np
from rdflib import Graph, Literal, Namespace
from rdflib.namespace import RDF, XSD

from .config import DC_BASE, DEVICE_NAME, FIT_BASE, FOAF_BASE, PERSON_NAME, PREDICATE_DATATYPES

FIT = Namespace(FIT_BASE)
FOAF = Namespace(FOAF_BASE)
DC = Namespace(DC_BASE)

PERSON = FIT[PERSON_NAME]
DEVICE = FIT[DEVICE_NAME]


def new_graph():
    # "core" keeps rdflib from binding its own dc/foaf spellings
    g = Graph(bind_namespaces="core")
    g.bind("rdf", RDF)
    g.bind("fit", FIT)
    g.bind("foaf", FOAF)
    g.bind("xsd", XSD)
    g.bind("dc", DC, override=True, replace=True)
    return g


# xsd:decimal and xsd:integer have no exponent form
POSITIONAL_TYPES = (XSD.decimal, XSD.integer)


def lexical(value, datatype=None):
    """Lexical form written into a typed literal."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "INF" if value > 0 else "-INF"
        if value.is_integer():
            return str(int(value))
        if datatype in POSITIONAL_TYPES:
            return np.format_float_positional(value, trim="-")
        return repr(value)
    return str(value)


def typed_literal(value, datatype):
    # rdflib would otherwise rewrite the lexical form into its canonical one
    return Literal(lexical(value, datatype), datatype=datatype, normalize=False)


class RunContext:
    """Graph and id counters for one conversion.

    Counters start at 1 and only move forward, so ``ac``, ``tp`` and ``sd``
    ids are never reused within the run. Nothing is shared between
    contexts.
    """

    def __init__(self):
        self.graph = new_graph()
        self.activity_no = 1
        self.trackpoint_no = 1
        self.sensor_data_no = 1

    def add_triple(self, subject, predicate, obj):
        self.graph.add((subject, predicate, obj))

    def add_measure(self, subject, name, value):
        self.add_triple(subject, FIT[name], typed_literal(value, PREDICATE_DATATYPES[name]))

    def new_activity(self, kind):
        node = FIT["ac%d" % self.activity_no]
        self.activity_no += 1
        self.add_triple(node, RDF.type, FIT[kind])
        return node

    def new_trackpoint(self):
        node = FIT["tp%d" % self.trackpoint_no]
        self.trackpoint_no += 1
        self.add_triple(node, RDF.type, FIT.Trackpoint)
        return node

    def new_sensor_data(self):
        node = FIT["sd%d" % self.sensor_data_no]
        self.sensor_data_no += 1
        self.add_triple(node, RDF.type, FIT.SensorData)
        return node

    def add_fixed_entities(self):
        # one athlete and one recording device per document
        self.add_triple(PERSON, RDF.type, FOAF.Person)
        self.add_triple(DEVICE, RDF.type, FIT.Device)
