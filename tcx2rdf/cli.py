"""Command line converter: TCX file in, Turtle file out, optional side outputs.

Usage:
    python -m tcx2rdf workout.tcx [-o workout.ttl] [--summary] [--maps] ...
"""

import argparse
import os
import re
import sys

from loguru import logger

from .config import LOG_LEVEL, MAPS_DIR, OUT_CSV, OUT_GPX, OUT_JSONLD, OUT_PYVIS, PLOTS_DIR
from .convert import convert_tcx_to_graph
from .errors import ConversionError
from .exports import (
    export_gpx,
    export_jsonld,
    export_pyvis_graph,
    export_trackpoints_csv,
    plot_heart_rate,
    save_activity_maps,
)
from .logger import setup_logger
from .queries import activity_summary
from .serializer import serialize_graph

TCX_SUFFIX = re.compile(r"\.tcx$", re.I)


def default_output_name(tcx_path):
    return TCX_SUFFIX.sub(".ttl", tcx_path)


# ---------- Entrypoint pipeline ----------
def pipeline(tcx_path, out_ttl=None, jsonld=None, csv=None, gpx=None, pyvis=None,
             maps_dir=None, plots_dir=None, summary=False):
    out_ttl = out_ttl or default_output_name(tcx_path)
    logger.info(f"Converting {tcx_path}...")
    with open(tcx_path, "rb") as f:
        rdf_g = convert_tcx_to_graph(f.read())

    with open(out_ttl, "w", encoding="utf-8") as f:
        f.write(serialize_graph(rdf_g))
    logger.info(f"Saved RDF TTL: {out_ttl}")

    if jsonld:
        export_jsonld(rdf_g, out=jsonld)
    if csv:
        export_trackpoints_csv(rdf_g, out=csv)
    if gpx:
        export_gpx(rdf_g, out=gpx)
    if pyvis:
        export_pyvis_graph(rdf_g, out_html=pyvis)
    if maps_dir:
        save_activity_maps(rdf_g, out_dir=maps_dir)
    if plots_dir:
        plot_heart_rate(rdf_g, out_dir=plots_dir)

    summary_df = None
    if summary:
        logger.info(f"Graph: {len(rdf_g)} triples")
        summary_df = activity_summary(rdf_g)
        print(summary_df.to_string(index=False) if not summary_df.empty else "No activities.")
    return rdf_g, out_ttl, summary_df


# ---------- CLI ----------
def build_parser():
    ap = argparse.ArgumentParser(prog="tcx2rdf", description="TCX -> RDF (Turtle) converter for workout files")
    ap.add_argument("tcx", help="Path to a .tcx file")
    ap.add_argument("-o", "--out", help="Output Turtle file (default: input name with .ttl)")
    ap.add_argument("--jsonld", nargs="?", const=OUT_JSONLD, help=f"Also write JSON-LD (default {OUT_JSONLD})")
    ap.add_argument("--csv", nargs="?", const=OUT_CSV, help=f"Also write a trackpoint CSV (default {OUT_CSV})")
    ap.add_argument("--gpx", nargs="?", const=OUT_GPX, help=f"Also write a GPX route (default {OUT_GPX})")
    ap.add_argument("--pyvis", nargs="?", const=OUT_PYVIS, help=f"Also write an interactive graph (default {OUT_PYVIS})")
    ap.add_argument("--maps", nargs="?", const=MAPS_DIR, help=f"Save one route map per activity (default {MAPS_DIR}/)")
    ap.add_argument("--plots", nargs="?", const=PLOTS_DIR, help=f"Save heart-rate plots (default {PLOTS_DIR}/)")
    ap.add_argument("--summary", action="store_true", help="Print an activity summary table")
    ap.add_argument("--log-level", default=LOG_LEVEL, help="Log level (default from LOG_LEVEL, INFO)")
    ap.add_argument("--log-file", help="Also log to this file")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logger(level=args.log_level, log_file=args.log_file)

    if not TCX_SUFFIX.search(args.tcx):
        logger.error(f"Only .tcx files are accepted: {args.tcx}")
        return 1
    if not os.path.exists(args.tcx):
        logger.error(f"TCX file not found: {args.tcx}")
        return 1

    try:
        pipeline(
            args.tcx,
            out_ttl=args.out,
            jsonld=args.jsonld,
            csv=args.csv,
            gpx=args.gpx,
            pyvis=args.pyvis,
            maps_dir=args.maps,
            plots_dir=args.plots,
            summary=args.summary,
        )
    except ConversionError as e:
        logger.error(f"Conversion failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
