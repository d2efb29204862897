"""Convert TCX workout files into a typed RDF graph and Turtle text."""

from .convert import convert_tcx_to_graph, convert_tcx_to_ttl
from .errors import ConversionError, MalformedInput, TcxParseError
from .serializer import ensure_prefixes, serialize_graph

__all__ = [
    "convert_tcx_to_graph",
    "convert_tcx_to_ttl",
    "serialize_graph",
    "ensure_prefixes",
    "ConversionError",
    "MalformedInput",
    "TcxParseError",
]

__version__ = "0.1.0"
