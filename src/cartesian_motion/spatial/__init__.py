"""Import classes and definitions representing 3D coordinate frames, poses, and rotations."""

from .distances import angular_distance_rad as angular_distance_rad
from .distances import euclidean_distance_3d_m as euclidean_distance_3d_m
from .frames import DEFAULT_FRAME as DEFAULT_FRAME
from .poses import XYZ_RPY as XYZ_RPY
from .poses import Pose3D as Pose3D
from .rotations import EulerRPY as EulerRPY
from .rotations import Quaternion as Quaternion
