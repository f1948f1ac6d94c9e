# all the settings live here so we dont scatter magic numbers everywhere

CANVAS_WIDTH = 1280
CANVAS_HEIGHT = 720
BACKGROUND_COLOR = (255, 255, 255)  # whiteboard, BGR

# drawing defaults
DEFAULT_COLOR = (0, 0, 0)
DEFAULT_PEN_SIZE = 5
DEFAULT_ERASER_SIZE = 20
DEFAULT_PEN_VARIANT = "normal"
DEFAULT_LINE_STYLE = "solid"

PEN_VARIANTS = ("normal", "ballpoint", "fountain", "brush", "pencil")
LINE_STYLES = ("solid", "dashed", "dotted", "multi")
TOOLS = ("pen", "eraser")
ERASER_SHAPES = ("circle", "rectangle")

# line style knobs, clamped by the state manager setters
DEFAULT_DASH_DENSITY = 10
DASH_DENSITY_RANGE = (3, 30)
DEFAULT_MULTI_LINE_COUNT = 2
MULTI_LINE_COUNT_RANGE = (2, 10)
DEFAULT_MULTI_LINE_SPACING = 10
MULTI_LINE_SPACING_RANGE = (5, 50)

# dash / gap proportions
DASHED_GAP_RATIO = 0.6      # gap = density * 0.6
DOTTED_DOT_RATIO = 1.5      # dot = pen size * 1.5
DOTTED_GAP_RATIO = 0.8      # gap = density * 0.8

# multi-line: weight of the current segment normal when blending corners
MULTI_LINE_BLEND = 0.9

# samples closer than this on both axes get dropped
MIN_SAMPLE_MOVE = 0.5

# pen dynamics. (min width, max width) are multiples of pen size,
# speed divisor turns segment length into a 0-1 speed factor
PEN_DYNAMICS = {
    "normal":    {"min": 1.0, "max": 1.0, "speed_divisor": None, "alpha": 1.0},
    "ballpoint": {"min": 0.7, "max": 1.2, "speed_divisor": 8.0, "alpha": 0.95},
    "fountain":  {"min": 0.4, "max": 1.8, "speed_divisor": 12.0, "alpha": 1.0},
    "brush":     {"min": 0.8, "max": 2.0, "speed_divisor": 12.0, "alpha": 0.75},
    "pencil":    {"min": 0.9, "max": 0.9, "speed_divisor": None, "alpha": 0.6},
}
FOUNTAIN_DIRECTION_WEIGHT = 0.3
PENCIL_GRAIN_STROKES = 2
BRUSH_GRAIN_STROKES = 4

# flat look for paths painted in one go (redraw from the archive, shapes):
# variant -> (alpha, width multiplier)
FLAT_PEN_STYLE = {
    "normal":    (1.0, 1.0),
    "ballpoint": (0.9, 1.0),
    "fountain":  (1.0, 1.0),
    "brush":     (0.85, 1.5),
    "pencil":    (0.7, 1.0),
}

# parametric shapes
SHAPE_KINDS = ("line", "rectangle", "circle")
SHAPE_LINE_STYLES = ("solid", "dashed", "dotted", "wavy", "double", "triple", "multi")
DEFAULT_SHAPE_KIND = "line"
DEFAULT_WAVE_DENSITY = 10     # wavelength in px
WAVE_DENSITY_RANGE = (5, 30)
SHAPE_DASH_GAP_RATIO = 0.5    # gap = density / 2
SHAPE_DOT_LENGTH = 2
WAVY_LINE_AMPLITUDE = 1.5     # times pen size
WAVY_CIRCLE_AMPLITUDE = 1.2
WAVY_MIN_SEGMENTS = 4
WAVY_CIRCLE_MIN_WAVES = 12
WAVE_CURVE_STEPS = 4          # points per quadratic curve when flattening
CIRCLE_SEGMENT_LENGTH = 4
CIRCLE_MIN_SEGMENTS = 24
MIN_CIRCLE_RADIUS = 2

# teaching tools
EDGE_TOLERANCE = 15
INTERIOR_MARGIN_FACTOR = 2   # legs-only set squares keep ink this many tolerances off a leg
RULER_WIDTH = 400
RULER_HEIGHT = 60
SET_SQUARE_HEIGHT = 100

# stroke selection
SELECTION_THRESHOLD = 10
COPY_OFFSET = 20

# profiler (prints timing breakdown on quit, off by default)
PROFILER_ENABLED = False
