"""Define constants related to reference frames."""

DEFAULT_FRAME = "world"
"""Name of the reference frame assumed when none is given."""
