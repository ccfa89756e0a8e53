"""
Shared constants for the editing system.

Pixel values are used both by hit_test (Python) and by the leaflet
shapes drawn in map_view. Keep them in sync!
"""

# Node fill/stroke colors
UNLABELED_COLOR = "blue"
LABELED_COLOR = "red"
PENDING_COLOR = "yellow"

# Edge line style
EDGE_COLOR = "black"
EDGE_DASH_ARRAY = "5,5"

# Marker radius in pixels (fixed size, no zoom scaling)
NODE_RADIUS = 8

# Distance in pixels from a node center that counts as a click on the node
NODE_CLICK_RADIUS = NODE_RADIUS + 2

# Distance in pixels from an edge line that counts as a click on the edge
EDGE_CLICK_TOLERANCE = 6

# Leaflet tiles are 256px squares at zoom 0
TILE_SIZE = 256
