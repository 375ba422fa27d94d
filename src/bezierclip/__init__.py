"""bezierclip: interval primitives for curve clipping."""
