import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from plotlab.charts._base import ChartContext
from plotlab.charts.registry import load_all_meta, render_chart
from plotlab.config import IMAGE_FORMATS, settings
from plotlab.demos import run_demos
from plotlab.engine import ingest
from plotlab.logging_config import setup_logging


def parse_params(pairs: Optional[List[str]]) -> Dict[str, Any]:
    """Turn ["hue=species", "corner=true"] into {"hue": "species", "corner": True}."""
    params: Dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got {pair!r}")
        try:
            params[key] = json.loads(raw)
        except json.JSONDecodeError:
            params[key] = raw
    return params


def cmd_charts(args) -> int:
    for meta in load_all_meta():
        print(f"{meta.slug:<22} {meta.seaborn_api:<40} {meta.title}")
    return 0


def cmd_render(args) -> int:
    if args.csv:
        df = ingest.from_csv_bytes(Path(args.csv).read_bytes(), args.csv)
        dataset_id = args.csv
    else:
        df = ingest.load_builtin(args.dataset)
        dataset_id = args.dataset

    fmt = args.format or settings.image_format
    ctx = ChartContext(df=df, dataset_id=dataset_id, image_format=fmt)
    result = render_chart(args.chart, ctx, parse_params(args.param))

    out = Path(args.out) if args.out else Path(settings.data_dir) / f"{args.chart}.{fmt}"
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(result.image.data)

    print(f"Wrote {out} ({len(result.image.data)} bytes)")
    if args.show_outputs:
        print(json.dumps(result.outputs, indent=2, default=str))
    return 0


def cmd_demo(args) -> int:
    out_dir = Path(args.out_dir or Path(settings.data_dir) / "demos")
    paths = run_demos(out_dir, only=args.only, image_format=args.format or settings.image_format)
    for p in paths:
        print(f"Wrote {p}")
    return 0


def cmd_serve(args) -> int:
    import uvicorn

    uvicorn.run("plotlab.main:app", host=args.host, port=args.port, log_level=settings.log_level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plotlab",
        description="Render seaborn pair plots, aggregated bar charts, correlation heatmaps "
                    "and matplotlib-customized plots",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--log-level", default=None, help="Override PLOTLAB_LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    charts_parser = subparsers.add_parser("charts", help="List available charts")
    charts_parser.set_defaults(func=cmd_charts)

    render_parser = subparsers.add_parser("render", help="Render one chart to a file")
    render_parser.add_argument("chart", type=str, help="Chart slug, e.g. pair-plot")
    source = render_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--dataset", type=str, help="seaborn example dataset name (iris, tips, ...)")
    source.add_argument("--csv", type=str, help="Path to a CSV file")
    render_parser.add_argument("--param", action="append", metavar="KEY=VALUE",
                               help="Chart parameter; VALUE is parsed as JSON when possible")
    render_parser.add_argument("--out", type=str, help="Output file")
    render_parser.add_argument("--format", choices=IMAGE_FORMATS, default=None)
    render_parser.add_argument("--show-outputs", action="store_true",
                               help="Print the chart outputs (aggregates, matrices) as JSON")
    render_parser.set_defaults(func=cmd_render)

    demo_parser = subparsers.add_parser("demo", help="Render the four tutorial examples")
    demo_parser.add_argument("--out-dir", type=str, default=None)
    demo_parser.add_argument("--only", type=str, default=None, help="Render a single chart's demo")
    demo_parser.add_argument("--format", choices=IMAGE_FORMATS, default=None)
    demo_parser.set_defaults(func=cmd_demo)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level or settings.log_level)

    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except (KeyError, ValueError, RuntimeError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
