"""Import utilities used for input/output, configuration files, and logging."""

from .logging import configure_logging as configure_logging
from .logging import console as console
from .yaml_utils import load_yaml_data as load_yaml_data
