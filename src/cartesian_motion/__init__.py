"""Compute validated, spatially continuous Cartesian motions for robot manipulators."""
