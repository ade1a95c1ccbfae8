"""Application configuration."""

import os

# Absolute tolerance, in money, under which a holding exactly covers a target
SWITCH_EPSILON = float(os.getenv("SWITCH_EPSILON", "0.01"))

# Percentages or units at or below this are floating-point leftovers, not positions
DUST_TOLERANCE = float(os.getenv("DUST_TOLERANCE", "1e-9"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
