"""Import classes and definitions representing pure geometric primitives."""

from .aabb import AxisAlignedBoundingBox as AxisAlignedBoundingBox
from .points import Point3D as Point3D
