"""Side outputs built from a converted graph: JSON-LD, CSV, GPX, maps, plots, KG view."""

import os

import folium
import gpxpy.gpx
import matplotlib.pyplot as plt
import networkx as nx
import numpy as np
import pandas as pd
from folium import PolyLine
from loguru import logger
from pyvis.network import Network
from rdflib import URIRef
from rdflib.namespace import RDF

from .config import FIT_BASE, MAPS_DIR, OUT_CSV, OUT_GPX, OUT_JSONLD, OUT_PYVIS, PLOTS_DIR, PYVIS_MAX_EDGES
from .queries import trackpoint_rows


def _short(uri):
    return str(uri).rsplit("#", 1)[-1].rsplit("/", 1)[-1]


# ---------- JSON-LD ----------
def export_jsonld(rdf_graph, out=OUT_JSONLD):
    jld = rdf_graph.serialize(format="json-ld", indent=2)
    with open(out, "w", encoding="utf-8") as f:
        f.write(jld)
    logger.info(f"Saved JSON-LD: {out}")
    return out


# ---------- CSV ----------
def export_trackpoints_csv(rdf_graph, out=OUT_CSV):
    df = trackpoint_rows(rdf_graph)
    df.to_csv(out, index=False)
    logger.info(f"Saved trackpoint CSV ({len(df)} rows): {out}")
    return out


# ---------- GPX ----------
def export_gpx(rdf_graph, out=OUT_GPX):
    gpx = gpxpy.gpx.GPX()
    df = trackpoint_rows(rdf_graph)
    if not df.empty:
        for activity, group in df.groupby("activity", sort=False):
            track = gpxpy.gpx.GPXTrack(name=_short(activity))
            segment = gpxpy.gpx.GPXTrackSegment()
            for row in group.itertuples(index=False):
                if pd.isna(row.latitude) or pd.isna(row.longitude):
                    continue
                time = None if pd.isna(row.time) else row.time.to_pydatetime()
                segment.points.append(gpxpy.gpx.GPXTrackPoint(row.latitude, row.longitude, time=time))
            track.segments.append(segment)
            gpx.tracks.append(track)
    with open(out, "w", encoding="utf-8") as f:
        f.write(gpx.to_xml())
    logger.info(f"Saved GPX ({len(gpx.tracks)} tracks): {out}")
    return out


# ---------- Folium maps ----------
def save_activity_maps(rdf_graph, out_dir=MAPS_DIR):
    os.makedirs(out_dir, exist_ok=True)
    df = trackpoint_rows(rdf_graph)
    saved = []
    if df.empty:
        return saved
    for activity, group in df.groupby("activity", sort=False):
        pts = group.dropna(subset=["latitude", "longitude"])
        coords = list(zip(pts["latitude"], pts["longitude"]))
        if not coords:
            logger.debug(f"No coordinates for {activity}, skipping map")
            continue
        name = _short(activity)
        mean_lat = np.mean([c[0] for c in coords]); mean_lon = np.mean([c[1] for c in coords])
        fmap = folium.Map(location=[mean_lat, mean_lon], zoom_start=14)
        PolyLine(coords, color="blue", weight=4, opacity=0.7).add_to(fmap)
        folium.Marker(coords[0], popup=f"{name} start").add_to(fmap)
        folium.Marker(coords[-1], popup=f"{name} end").add_to(fmap)
        out_path = os.path.join(out_dir, f"{name}.html")
        fmap.save(out_path)
        logger.info(f"Saved route map: {out_path}")
        saved.append(out_path)
    return saved


# ---------- Heart-rate plots ----------
def plot_heart_rate(rdf_graph, out_dir=PLOTS_DIR):
    os.makedirs(out_dir, exist_ok=True)
    df = trackpoint_rows(rdf_graph)
    saved = []
    if df.empty:
        return saved
    for activity, group in df.groupby("activity", sort=False):
        samples = group.dropna(subset=["heartRate", "time"])
        if len(samples) < 2:
            continue
        name = _short(activity)
        plt.figure(figsize=(6, 3))
        plt.plot(samples["time"].dt.tz_localize(None), samples["heartRate"], marker=".")
        plt.title(f"{name} HR (n={len(samples)}), max={samples['heartRate'].max():.0f} bpm")
        plt.xlabel("Time"); plt.ylabel("HR (bpm)")
        png = os.path.join(out_dir, f"hr_{name}.png")
        plt.tight_layout(); plt.savefig(png); plt.close()
        logger.info(f"Saved HR plot: {png}")
        saved.append(png)
    return saved


# ---------- Knowledge-graph view ----------
def export_pyvis_graph(rdf_graph, out_html=OUT_PYVIS, max_edges=PYVIS_MAX_EDGES):
    type_map = {}
    for s, p, o in rdf_graph.triples((None, RDF.type, None)):
        if isinstance(s, URIRef) and isinstance(o, URIRef):
            type_map[str(s)] = str(o)

    # instance-to-instance edges only; rdf:type targets become groups
    Gnx = nx.MultiDiGraph()
    edge_count = 0
    for s, p, o in rdf_graph:
        if edge_count >= max_edges:
            break
        if p == RDF.type or not isinstance(o, URIRef):
            continue
        s_s, o_s = str(s), str(o)
        if not (s_s.startswith(FIT_BASE) and o_s.startswith(FIT_BASE)):
            continue
        Gnx.add_edge(s_s, o_s, label=_short(p))
        edge_count += 1

    for n in Gnx.nodes():
        t = type_map.get(n)
        Gnx.nodes[n]["label"] = _short(n)
        Gnx.nodes[n]["group"] = _short(t) if t else "Entity"

    net = Network(height="800px", width="100%", directed=True, cdn_resources="remote")
    net.toggle_physics(True)
    for node, data in Gnx.nodes(data=True):
        net.add_node(node, label=data["label"], title=node, group=data["group"])
    for u, v, k, d in Gnx.edges(keys=True, data=True):
        net.add_edge(u, v, title=d.get("label", ""))

    net.write_html(out_html, open_browser=False)
    logger.info(f"Saved PyVis KG ({edge_count} edges): {out_html}")
    return out_html
