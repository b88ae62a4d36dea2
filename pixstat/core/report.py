"""Report builder — text and JSON output for pixstat results."""

import json
from typing import Any

from pixstat.core.types import Pixel, Report


def format_text(report: Report) -> str:
    """Format report as the two human-readable lines."""
    lines = [
        f'Standard deviation: {report.stats.stddev.format()}',
        f'{report.homogeneity:g}% homogeneity',
    ]
    return '\n'.join(lines)


def _pixel_obj(pixel: Pixel) -> dict[str, float]:
    return {'r': pixel.r, 'g': pixel.g, 'b': pixel.b}


def format_json(report: Report) -> str:
    """Format report as JSON. Non-finite values are emitted as NaN/Infinity."""
    obj: dict[str, Any] = {
        'image': report.image_path,
        'dimensions': {'width': report.image_width, 'height': report.image_height},
        'mean': _pixel_obj(report.stats.mean),
        'stddev': _pixel_obj(report.stats.stddev),
        'homogeneity': report.homogeneity,
    }
    return json.dumps(obj, indent=2)
