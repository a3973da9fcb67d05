"""Grid route planning for warehouse floors: A* / Dijkstra over an occupancy grid."""

__version__ = "0.1.0"
