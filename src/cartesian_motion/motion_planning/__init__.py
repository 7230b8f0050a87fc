"""Import classes and definitions used to construct validated Cartesian paths."""

from .cartesian_path import CartesianPathBuilder as CartesianPathBuilder
from .cartesian_path import PathOutcome as PathOutcome
from .collision_validation import validate_collision_free as validate_collision_free
from .config import CartesianPathConfig as CartesianPathConfig
from .config import ValidationMode as ValidationMode
from .errors import CollisionDetectedError as CollisionDetectedError
from .errors import FailureKind as FailureKind
from .errors import IkFailureError as IkFailureError
from .errors import PathConstructionError as PathConstructionError
from .errors import SpaceJumpError as SpaceJumpError
from .interpolation import interpolate_cartesian_path as interpolate_cartesian_path
from .interpolation import interpolate_pose as interpolate_pose
from .link_motion import compute_swept_distance as compute_swept_distance
from .link_motion import swept_distance_bound as swept_distance_bound
from .path import ConfigurationPath as ConfigurationPath
from .path import PathStage as PathStage
from .path import PathStatus as PathStatus
from .refinement import AdaptiveRefiner as AdaptiveRefiner
from .refinement import RefinementReport as RefinementReport
from .sinks import ConsolePathSink as ConsolePathSink
from .sinks import PathSink as PathSink
