from app.config import (
    DEFAULT_COLOR, DEFAULT_PEN_SIZE, DEFAULT_ERASER_SIZE,
    DEFAULT_PEN_VARIANT, DEFAULT_LINE_STYLE,
    PEN_VARIANTS, LINE_STYLES, TOOLS, ERASER_SHAPES,
    DEFAULT_DASH_DENSITY, DASH_DENSITY_RANGE,
    DEFAULT_MULTI_LINE_COUNT, MULTI_LINE_COUNT_RANGE,
    DEFAULT_MULTI_LINE_SPACING, MULTI_LINE_SPACING_RANGE,
    SHAPE_KINDS, SHAPE_LINE_STYLES, DEFAULT_SHAPE_KIND,
    DEFAULT_WAVE_DENSITY, WAVE_DENSITY_RANGE,
)


def _clamp(value, bounds):
    lo, hi = bounds
    return max(lo, min(hi, value))


class StateManager:
    """
    keeps track of what tool is active, current color, line style etc.

    numbers get clamped here, once, when they are set. the per-sample
    code trusts whatever it reads from this object.
    bad names are ignored so a stale saved setting can't break drawing.
    """

    def __init__(self):
        self.current_tool = "pen"  # pen, eraser
        self.color = DEFAULT_COLOR
        self.pen_size = DEFAULT_PEN_SIZE
        self.eraser_size = DEFAULT_ERASER_SIZE
        self.eraser_shape = "circle"
        self.pen_variant = DEFAULT_PEN_VARIANT
        self.line_style = DEFAULT_LINE_STYLE
        self.dash_density = DEFAULT_DASH_DENSITY
        self.multi_line_count = DEFAULT_MULTI_LINE_COUNT
        self.multi_line_spacing = DEFAULT_MULTI_LINE_SPACING
        # shape tool: which shape, and its own line style (shapes can be wavy)
        self.shape_kind = DEFAULT_SHAPE_KIND
        self.shape_line_style = DEFAULT_LINE_STYLE
        self.wave_density = DEFAULT_WAVE_DENSITY

    def set_tool(self, tool_name):
        if tool_name in TOOLS:
            self.current_tool = tool_name

    def set_color(self, color):
        self.color = tuple(color)

    def set_pen_size(self, size):
        self.pen_size = max(1, size)

    def set_eraser_size(self, size):
        self.eraser_size = max(1, size)

    def set_eraser_shape(self, shape):
        if shape in ERASER_SHAPES:
            self.eraser_shape = shape

    def set_pen_variant(self, variant):
        if variant in PEN_VARIANTS:
            self.pen_variant = variant

    def set_line_style(self, style):
        if style in LINE_STYLES:
            self.line_style = style

    def set_dash_density(self, density):
        self.dash_density = _clamp(density, DASH_DENSITY_RANGE)

    def set_multi_line_count(self, count):
        self.multi_line_count = int(_clamp(count, MULTI_LINE_COUNT_RANGE))

    def set_multi_line_spacing(self, spacing):
        self.multi_line_spacing = _clamp(spacing, MULTI_LINE_SPACING_RANGE)

    def set_shape_kind(self, kind):
        if kind in SHAPE_KINDS:
            self.shape_kind = kind

    def set_shape_line_style(self, style):
        if style in SHAPE_LINE_STYLES:
            self.shape_line_style = style

    def set_wave_density(self, density):
        self.wave_density = _clamp(density, WAVE_DENSITY_RANGE)

    @property
    def is_pen(self):
        return self.current_tool == "pen"

    def update(self, settings):
        """apply a dict of saved settings through the clamping setters"""
        setters = {
            "tool": self.set_tool,
            "color": self.set_color,
            "pen_size": self.set_pen_size,
            "eraser_size": self.set_eraser_size,
            "eraser_shape": self.set_eraser_shape,
            "pen_variant": self.set_pen_variant,
            "line_style": self.set_line_style,
            "dash_density": self.set_dash_density,
            "multi_line_count": self.set_multi_line_count,
            "multi_line_spacing": self.set_multi_line_spacing,
            "shape_kind": self.set_shape_kind,
            "shape_line_style": self.set_shape_line_style,
            "wave_density": self.set_wave_density,
        }
        for key, value in settings.items():
            if key in setters:
                setters[key](value)
