"""hilbert-halftone -- space-filling curve halftones for raster images.

Renders a square image as a single connected Hilbert-style curve whose
local ink density follows the image's brightness: dark regions are
subdivided down to the finest curve order, bright regions keep the
coarse outline.

The curve of order N is built from four rotated copies of the order
N-1 curve joined by three junction cells, so the path stays continuous
at every scale and wherever subdivision stops.
"""
