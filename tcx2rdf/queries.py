"""Reading a converted graph back: SPARQL helpers returning pandas frames."""

import pandas as pd
from rdflib import Graph

from .config import DC_BASE, FIT_BASE, RDF_BASE

PREFIXES = f"""
PREFIX rdf: <{RDF_BASE}>
PREFIX fit: <{FIT_BASE}>
PREFIX dc: <{DC_BASE}>
"""

ACTIVITY_QUERY = PREFIXES + """
SELECT ?activity ?kind ?title ?created ?duration ?totalDistance
       ?averageHeartRate ?maxHeartRate ?totalPowerOutput
WHERE {
    ?activity fit:performedBy ?person ;
              rdf:type ?kind .
    OPTIONAL { ?activity dc:title ?title }
    OPTIONAL { ?activity dc:created ?created }
    OPTIONAL { ?activity fit:duration ?duration }
    OPTIONAL { ?activity fit:totalDistance ?totalDistance }
    OPTIONAL { ?activity fit:averageHeartRate ?averageHeartRate }
    OPTIONAL { ?activity fit:maxHeartRate ?maxHeartRate }
    OPTIONAL { ?activity fit:totalPowerOutput ?totalPowerOutput }
}
"""

TRACKPOINT_QUERY = PREFIXES + """
SELECT ?activity ?trackpoint ?timestamp ?latitude ?longitude ?heartRate ?powerOutput
WHERE {
    ?activity fit:hasTrackpoint ?trackpoint .
    ?trackpoint fit:timestamp ?timestamp ;
                fit:hasSensorData ?sensorData .
    OPTIONAL { ?sensorData fit:latitude ?latitude }
    OPTIONAL { ?sensorData fit:longitude ?longitude }
    OPTIONAL { ?sensorData fit:heartRate ?heartRate }
    OPTIONAL { ?sensorData fit:powerOutput ?powerOutput }
}
"""

ACTIVITY_NUMERIC = ["totalDistance", "averageHeartRate", "maxHeartRate", "totalPowerOutput"]
TRACKPOINT_NUMERIC = ["latitude", "longitude", "heartRate", "powerOutput"]


def load_ttl(ttl_text):
    g = Graph()
    g.parse(data=ttl_text, format="turtle")
    return g


# ---------- SPARQL helper ----------
def run_sparql(rdflib_graph, sparql_query):
    res = rdflib_graph.query(sparql_query)
    cols = res.vars
    rows = []
    for row in res:
        rows.append([str(x) if x is not None else None for x in row])
    return pd.DataFrame(rows, columns=[str(c) for c in cols])


def _node_order(series):
    # ac2 before ac10
    return series.str.extract(r"(\d+)$", expand=False).astype(float)


def activity_summary(rdflib_graph):
    """One row per activity with its aggregate metrics."""
    df = run_sparql(rdflib_graph, ACTIVITY_QUERY)
    if df.empty:
        return df
    df["kind"] = df["kind"].str.rsplit("#", n=1).str[-1]
    for col in ACTIVITY_NUMERIC:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    df = df.sort_values("activity", key=_node_order)
    return df.reset_index(drop=True)


def trackpoint_rows(rdflib_graph):
    """One row per trackpoint joined with its sensor data, oldest first."""
    df = run_sparql(rdflib_graph, TRACKPOINT_QUERY)
    if df.empty:
        return df
    for col in TRACKPOINT_NUMERIC:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    df["time"] = pd.to_datetime(df["timestamp"], utc=True, errors="coerce")
    df["order"] = _node_order(df["trackpoint"])
    df = df.sort_values(["time", "order"]).drop(columns=["order"])
    return df.reset_index(drop=True)
