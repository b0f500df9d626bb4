"""Constants used across the application."""

import os
from pathlib import Path

# Output directory - configurable via environment variable
# Default: 'output_data' in current working directory
OUTPUT_DATA_DIR = os.getenv("OUTPUT_DATA_DIR", str(Path.cwd() / "output_data"))

# Physical constants
EARTH_RADIUS_KM = 6371.0  # Earth's mean radius in kilometers

# Interpolation defaults
DEFAULT_SAMPLE_COUNT = 100  # Interior samples per arc, endpoints excluded
MIN_SAMPLE_COUNT = 2

# Antimeridian and numeric tolerances
ANTIMERIDIAN_LON = 180.0
DEGENERATE_ANGLE_RAD = 1e-12  # Below this the endpoints coincide
ANTIPODAL_TOLERANCE_RAD = 1e-9  # Within this of pi the minor arc is not unique

# Segment identifiers
SEGMENT_ID_SEPARATOR = "-"
