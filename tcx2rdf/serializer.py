"""Turtle output with explicit literal datatypes and guaranteed prefixes."""

import re

from rdflib import Literal, plugin
from rdflib.plugins.serializers.turtle import TurtleSerializer
from rdflib.serializer import Serializer

from .config import REQUIRED_PREFIXES, TURTLE_FORMAT


class ExplicitTurtleSerializer(TurtleSerializer):
    """Turtle serializer that never abbreviates typed literals.

    Stock Turtle output writes integers and decimals as bare numbers;
    consumers of the fitness graph expect ``"150"^^xsd:integer``.
    """

    def label(self, node, position):
        if isinstance(node, Literal):
            # n3() without the plain-number shorthand; xsd is bound on every graph
            return node.n3(self.store.namespace_manager)
        return super().label(node, position)


plugin.register(TURTLE_FORMAT, Serializer, __name__, "ExplicitTurtleSerializer")


def ensure_prefixes(ttl_text):
    """Prepend any required ``@prefix`` line the serializer left out.

    rdflib only declares namespaces that survive into the output, so an
    empty graph would otherwise come out with none.
    """
    for prefix, uri in REQUIRED_PREFIXES.items():
        if not re.search(r"^@prefix\s+%s:" % re.escape(prefix), ttl_text, re.M):
            ttl_text = f"@prefix {prefix}: <{uri}> .\n" + ttl_text
    return ttl_text.strip() + "\n"


def serialize_graph(graph):
    ttl_text = graph.serialize(format=TURTLE_FORMAT)
    if isinstance(ttl_text, bytes):
        ttl_text = ttl_text.decode("utf-8")
    return ensure_prefixes(ttl_text)
