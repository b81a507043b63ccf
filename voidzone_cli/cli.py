"""
voidzone CLI - Main entry point.

Runs one void-detection query against a zone file and prints the new zone
as JSON.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

import cv2
import yaml

from voidzone import DetectorConfig, VoidDetector, ViewportTransform, ZoneVoidCreated
from voidzone.rendering import VoidPreview

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_NO_ZONE = 2


def load_zones(zones_path: str) -> List[Dict[str, Any]]:
    """
    Load zone records from a YAML or JSON file.

    The file holds either a list of zones or a mapping with a ``zones`` key.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the content is not a zone list
    """
    path = Path(zones_path)

    if not path.exists():
        raise FileNotFoundError(f"Zones file not found: {zones_path}")

    try:
        with open(path) as f:
            # YAML is a superset of JSON
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML/JSON in {zones_path}: {e}")

    if isinstance(data, dict):
        data = data.get("zones")
    if not isinstance(data, list):
        raise ValueError(f"{zones_path} must contain a list of zones (or a 'zones' key)")
    for index, zone in enumerate(data):
        if not isinstance(zone, dict):
            raise ValueError(f"Zone #{index} in {zones_path} is not a mapping")
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voidzone-detect",
        description="voidzone - Create a zone from the empty space under a click",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Click at screen (640, 400) with the map filling a 1280x844 viewport
  voidzone-detect zones.yaml --x 640 --y 400

  # Panned and zoomed map inside a 1600x900 box at (0, 60)
  voidzone-detect zones.yaml --x 900 --y 500 --viewport 0 60 1600 900 \\
      --pan-x -120 --pan-y 40 --zoom 1.5

  # Engineering map, custom config, write a diagnostic image
  voidzone-detect eng.json --x 300 --y 200 --mode eng \\
      --config config/detector.yaml --preview void.png
"""
    )

    parser.add_argument('zones', help='YAML/JSON file with the current zones')
    parser.add_argument('--x', type=float, required=True, help='Click x in screen pixels')
    parser.add_argument('--y', type=float, required=True, help='Click y in screen pixels')
    parser.add_argument(
        '--mode',
        default=None,
        help='Map mode (default: config default_mode)'
    )
    parser.add_argument(
        '--viewport',
        type=float,
        nargs=4,
        metavar=('LEFT', 'TOP', 'WIDTH', 'HEIGHT'),
        default=None,
        help='Viewport box on screen (default: view size at origin)'
    )
    parser.add_argument('--pan-x', type=float, default=0.0, help='Pan offset x (default: 0)')
    parser.add_argument('--pan-y', type=float, default=0.0, help='Pan offset y (default: 0)')
    parser.add_argument('--zoom', type=float, default=1.0, help='Zoom scale (default: 1)')
    parser.add_argument('--config', default=None, help='Detector config YAML')
    parser.add_argument('--preview', default=None, help='Write a diagnostic PNG here')
    parser.add_argument(
        '--preview-cell-size',
        type=int,
        default=3,
        help='Preview pixels per raster cell (default: 3)'
    )
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = DetectorConfig.from_yaml(Path(args.config)) if args.config else DetectorConfig()
        detector = VoidDetector(config)
        zones = load_zones(args.zones)
        view = config.map_mode(args.mode).view_space

        if args.viewport:
            left, top, width, height = args.viewport
        else:
            left, top, width, height = 0.0, 0.0, view.width, view.height
        viewport = ViewportTransform(
            left=left,
            top=top,
            width=width,
            height=height,
            pan_x=args.pan_x,
            pan_y=args.pan_y,
            zoom=args.zoom,
        )
    except (FileNotFoundError, KeyError, TypeError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    analysis = detector.analyze(zones, (args.x, args.y), viewport=viewport, mode=args.mode)

    if args.preview:
        image = VoidPreview(cell_size=args.preview_cell_size).render(analysis)
        if not cv2.imwrite(args.preview, image):
            print(f"Error: could not write preview to {args.preview}", file=sys.stderr)
            return EXIT_INPUT_ERROR

    result = analysis.result
    if isinstance(result, ZoneVoidCreated):
        print(json.dumps(result.to_dict(), indent=2))
        return EXIT_OK

    print(f"{result.kind}: {result.message}", file=sys.stderr)
    return EXIT_NO_ZONE


if __name__ == '__main__':
    sys.exit(main())
