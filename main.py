"""
replays a recorded pointer script through the drawing engine.

    python main.py script.json [output.png]

script format:
    {
      "canvas": {"width": 1280, "height": 720},
      "style": {"line_style": "dashed", "dash_density": 12, "pen_variant": "brush"},
      "tools": [
        {"kind": "ruler", "center": [400, 300], "rotation": 30},
        {"kind": "set_square", "angle": 45, "center": [900, 400], "edge_rule": "legs"}
      ],
      "strokes": [
        {"points": [[100, 100], [120, 104], ...], "style": {"color": [0, 0, 255]}},
        {"points": [...], "abort": true},
        {"shape": "circle", "start": [600, 300], "end": [660, 300], "style": {"shape_line_style": "wavy"}}
      ]
    }

per-entry "style" is applied on top of the global one and stays in
effect for the following strokes, like changing pens on a real board.
"""
import json
import logging
import os
import sys

import cv2

from app.canvas import Canvas
from app.config import CANVAS_WIDTH, CANVAS_HEIGHT, PROFILER_ENABLED, SHAPE_KINDS
from app.ui import UI
from core.drawing_engine import DrawingEngine
from core.edge_snap import EDGES_LEGS_AND_HYPOTENUSE
from core.profiler import Profiler

logger = logging.getLogger("whiteboard")


def setup_logging():
    level = os.environ.get("WHITEBOARD_LOG", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s  %(name)-24s %(levelname)-5s %(message)s",
        datefmt="%H:%M:%S",
    )


def load_script(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def place_tools(engine, tool_entries):
    for entry in tool_entries:
        center = entry.get("center", (CANVAS_WIDTH / 2, CANVAS_HEIGHT / 2))
        rotation = entry.get("rotation", 0.0)
        if entry.get("kind") == "ruler":
            engine.teaching_tools.add_ruler(center, rotation=rotation)
        elif entry.get("kind") == "set_square":
            engine.teaching_tools.add_set_square(
                center, angle=entry.get("angle", 60), rotation=rotation,
                edge_rule=entry.get("edge_rule", EDGES_LEGS_AND_HYPOTENUSE),
            )
        else:
            logger.warning("unknown tool kind %r, skipped", entry.get("kind"))


def replay(engine, strokes):
    """push every entry through the engine. returns how many got archived"""
    archived = 0
    for stroke in strokes:
        if "shape" in stroke:
            if stroke["shape"] not in SHAPE_KINDS or "start" not in stroke or "end" not in stroke:
                logger.warning("bad shape entry %r, skipped", stroke)
                continue
            engine.state.update(stroke.get("style", {}))
            if engine.draw_shape(stroke["start"], stroke["end"], kind=stroke["shape"]) is not None:
                archived += 1
            continue

        points = stroke.get("points") or []
        if not points:
            continue
        engine.state.update(stroke.get("style", {}))

        if not engine.begin_stroke(points[0]):
            continue
        for point in points[1:]:
            engine.move(point)

        if stroke.get("abort"):
            engine.abort_stroke()
        elif engine.end_stroke() is not None:
            archived += 1
    return archived


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    setup_logging()

    if not argv:
        print(__doc__)
        return 2

    try:
        script = load_script(argv[0])
    except (OSError, ValueError) as e:
        print(f"\ncant read script {argv[0]}: {e}")
        return 1

    size = script.get("canvas", {})
    canvas = Canvas(size.get("width", CANVAS_WIDTH), size.get("height", CANVAS_HEIGHT))
    profiler = Profiler(enabled=PROFILER_ENABLED)
    engine = DrawingEngine(canvas, profiler=profiler)
    engine.state.update(script.get("style", {}))
    place_tools(engine, script.get("tools", []))

    archived = replay(engine, script.get("strokes", []))
    print(f"replayed {archived} strokes, {len(canvas.ops)} draw ops")

    if len(argv) > 1:
        # the file gets the drawing only, tool overlays are screen furniture
        canvas.save(argv[1])
        print(f"saved drawing to {argv[1]}")
    else:
        frame = UI().draw_overlay(canvas.snapshot(), engine.state, engine.teaching_tools.tools,
                                  engine.resolver)
        cv2.imshow("Whiteboard", frame)
        cv2.waitKey(0)
        cv2.destroyAllWindows()

    if PROFILER_ENABLED:
        profiler.report()
    return 0


if __name__ == "__main__":
    sys.exit(main())
