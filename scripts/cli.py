"""
CLI to replay recorded blendshape frames -> mood timeline JSON.
"""
from __future__ import annotations
import argparse, json
import logging
import os
import sys

from core.config import Settings
from core.models import InvalidFeatureInput
from core.pipeline import replay_frames, summarize_readings

logger = logging.getLogger(__name__)


def load_frames(path: str) -> list:
    """Read a JSON array or JSON-lines file of {"timestamp", "blendshapes"} frames."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    stripped = text.lstrip()
    if stripped.startswith("["):
        return json.loads(stripped)
    return [json.loads(line) for line in text.splitlines() if line.strip()]


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser()
    p.add_argument("--frames", required=True, help="Path to JSON / JSONL frames")
    p.add_argument("--out", default="output/moods.json", help="Path to output JSON")
    args = p.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    try:
        frames = load_frames(args.frames)
        readings = replay_frames(frames, settings)
    except FileNotFoundError:
        print(f"Frames file not found: {args.frames}", file=sys.stderr)
        return 2
    except (json.JSONDecodeError, InvalidFeatureInput) as e:
        logger.debug("[cli] replay failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    result = {
        "timeline": [r.model_dump() for r in readings],
        "summary": summarize_readings(readings).model_dump(),
    }
    print(json.dumps(result, indent=2, ensure_ascii=False))

    # Also write to file
    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(args.out, "w", encoding="utf-8") as f:
        json.dump(result, f, indent=2, ensure_ascii=False)
    print(f"Timeline written to {args.out}", file=sys.stderr)
    return 0

if __name__ == "__main__":
    sys.exit(main())
