"""growgrid: keyframe lighting designer for horticultural LED grids."""

__version__ = "0.1.0"
