"""Global configuration: constants, defaults, logging."""

from __future__ import annotations

import logging
import os

# Default number of decimals kept for emitted numbers
DEFAULT_PRECISION = 3

# Angles are compared against multiples/fractions of pi after scaling by this
# factor and rounding (five decimal places).
ANGLE_SCALE = 100000

# Largest divisor / multiplier tried when recognising pi in an angle
MAX_PI_FACTOR = 10

# A duplicate geometry is instanced when its count exceeds this threshold.
# With instance-all every geometry is shared, even a single occurrence.
INSTANCE_THRESHOLD = 1
INSTANCE_ALL_THRESHOLD = 0

# Fallback base name for shared geometry resources
DEFAULT_MESH_NAME = "Part"

# Props written as quoted strings rather than embedded expressions
STRING_PROPS = ("name",)

# three.js defaults; light/camera props equal to these are omitted
DEFAULT_LIGHT_COLOR = "ffffff"
DEFAULT_SPOT_ANGLE_DIVISOR = 3  # SpotLight.angle = Math.PI / 3
DEFAULT_DECAY = 2.0
DEFAULT_CAMERA_FOV = 50.0
DEFAULT_CAMERA_NEAR = 0.1
DEFAULT_CAMERA_FAR = 2000.0
DEFAULT_CAMERA_ZOOM = 1.0

# Module specifiers imported by every generated component
DREI_IMPORTS = ("useAnimations", "useGLTF", "Merged", "PerspectiveCamera", "OrthographicCamera")
FIBER_IMPORTS = ("GroupProps", "MeshProps", "useGraph")
THREE_IMPORTS = ("AnimationClip", "Group", "Mesh", "MeshPhysicalMaterial", "MeshStandardMaterial")

# Environment variable read by configure_logging()
LOG_LEVEL_ENV = "SCENEJSX_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stream handler to the ``scenejsx`` logger.

    The level falls back to ``$SCENEJSX_LOG_LEVEL`` and then to WARNING.
    Calling this more than once only updates the level.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger("scenejsx")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
