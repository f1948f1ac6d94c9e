from core.geometry import perpendicular


class Pen:
    """
    draws one sampled segment with whatever width/alpha the pen
    dynamics picked, plus any grain strands (pencil, brush)
    """

    def draw(self, canvas, sample, color):
        prev, curr = sample.prev, sample.curr
        if prev is None:
            # first sample of a stroke, just a round blob
            canvas.draw_line(curr, curr, color, sample.render_width, sample.render_alpha)
            return

        canvas.draw_line(prev, curr, color, sample.render_width, sample.render_alpha)

        if not sample.grain:
            return
        nx, ny = perpendicular(prev, curr)
        for strand in sample.grain:
            ox = nx * strand.offset
            oy = ny * strand.offset
            canvas.draw_line((prev[0] + ox, prev[1] + oy), (curr[0] + ox, curr[1] + oy),
                             color, strand.width, strand.alpha)


class Eraser:
    """erases by painting the background back in"""

    def __init__(self, shape="circle"):
        self.shape = shape

    def draw(self, canvas, sample, color=None):
        # color doesnt matter for eraser
        prev = sample.prev if sample.prev is not None else sample.curr
        canvas.erase_line(prev, sample.curr, sample.render_width, self.shape)


def multi_line_drawer(canvas, color, width, alpha=1.0):
    """callback for render_multiline_segment that puts lines on the canvas"""
    def draw(start, end):
        canvas.draw_line(start, end, color, width, alpha)
    return draw
