"""Import classes and definitions describing robot kinematics and collision queries."""

from .collision_checker import CollisionChecker as CollisionChecker
from .configuration import Configuration as Configuration
from .link_geometries import LinkGeometries as LinkGeometries
from .robot_model import RobotModel as RobotModel
from .robot_state import RobotState as RobotState
