import cv2
import numpy as np


TOOL_FILL = (230, 200, 150)      # light blue-ish plastic
TOOL_BORDER = (140, 100, 40)
SNAP_HIGHLIGHT = (0, 200, 0)     # green


def _poly(points):
    return np.array([[int(round(x)), int(round(y))] for x, y in points], dtype=np.int32)


class UI:
    """overlay stuff drawn on top of the board: teaching tools, snapped edge, style pill"""

    def _draw_pill(self, frame, text, x, y, color, bg=(40, 40, 40)):
        """draw text with a rounded pill-shaped background"""
        font = cv2.FONT_HERSHEY_SIMPLEX
        scale = 0.55
        thick = 1
        sz, baseline = cv2.getTextSize(text, font, scale, thick)
        pad_x, pad_y = 10, 6
        x1, y1 = x, y - sz[1] - pad_y
        x2, y2 = x + sz[0] + pad_x * 2, y + pad_y + baseline

        # semi-transparent background
        overlay = frame.copy()
        cv2.rectangle(overlay, (x1, y1), (x2, y2), bg, -1)
        cv2.addWeighted(overlay, 0.65, frame, 0.35, 0, frame)

        cv2.putText(frame, text, (x + pad_x, y), font, scale, color, thick, cv2.LINE_AA)
        return x2  # return right edge for chaining

    def draw_tools(self, frame, tools, snapped_tool=None, snapped_edge=None):
        """rulers and set squares as translucent plastic on top of the ink"""
        if not tools:
            return frame
        overlay = frame.copy()
        for tool in tools:
            cv2.fillPoly(overlay, [_poly(tool.outline())], TOOL_FILL)
        cv2.addWeighted(overlay, 0.55, frame, 0.45, 0, frame)

        for tool in tools:
            cv2.polylines(frame, [_poly(tool.outline())], True, TOOL_BORDER, 1, cv2.LINE_AA)

        if snapped_tool is not None and snapped_edge is not None:
            segment = snapped_tool.edge_segment(snapped_edge)
            if segment is not None:
                start, end = [(int(round(p[0])), int(round(p[1]))) for p in segment]
                cv2.line(frame, start, end, SNAP_HIGHLIGHT, 3, cv2.LINE_AA)
        return frame

    def draw_overlay(self, frame, state, tools=(), resolver=None):
        """draw all the UI elements onto the frame"""
        snapped_tool = resolver.snapped_tool if resolver is not None else None
        snapped_edge = resolver.snapped_edge if resolver is not None else None
        self.draw_tools(frame, tools, snapped_tool, snapped_edge)

        label = f"{state.current_tool.upper()}  {state.pen_variant}  {state.line_style}"
        self._draw_pill(frame, label, 8, 28, (255, 255, 255))

        # current color dot after the label
        cv2.circle(frame, (20, 52), 8, state.color, -1)
        cv2.circle(frame, (20, 52), 9, (40, 40, 40), 1)
        return frame
