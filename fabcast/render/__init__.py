"""Presentation: lower-third phases and the broadcast-capture page."""
from fabcast.render.lower_third import LowerThird, Phase, RenderFrame, render_text

__all__ = ["LowerThird", "Phase", "RenderFrame", "render_text"]
