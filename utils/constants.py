"""
Constants used across the fluid calculator.

This module defines physical constants, classification thresholds and history settings
used throughout the server.
"""

# Physical constants
G_GRAVITY = 9.81             # Gravity acceleration used by every formula, m/s²
WATER_DENSITY = 1000.0       # Water density for water column conversion, kg/m³

# Convenience re-expressions of results
M3S_to_M3H = 3600.0          # m³/s to m³/h
M3S_to_LS = 1000.0           # m³/s to L/s
MS_to_KMH = 3.6              # m/s to km/h
PA_per_KPA = 1000.0          # Pa in one kPa
PA_per_BAR = 100000.0        # Pa in one bar
PA_per_PSI = 6894.76         # Pa in one psi
W_per_KW = 1000.0            # W in one kW
W_per_HP = 745.7             # W in one hp

# Reynolds regime thresholds
RE_LAMINAR_MAX = 2300.0      # Re below this is laminar
RE_TURBULENT_MIN = 4000.0    # Re at or above this is turbulent

# Result formatting
FORMAT_LARGE_THRESHOLD = 10000.0  # |value| above this uses significant digits
FORMAT_SMALL_THRESHOLD = 0.001    # 0 < |value| below this uses significant digits
FORMAT_DIGITS = 6                 # Significant digits / decimals for result display

# History
HISTORY_KEY = "calculationHistory"   # Blob store key holding the serialized log
MAX_HISTORY = 25                     # Maximum number of kept history entries
HISTORY_TIMESTAMP_FORMAT = "%d/%m/%Y, %H:%M:%S"  # pt-BR style creation timestamp
HISTORY_FILE_ENV = "FLUIDCALC_HISTORY_FILE"      # Env var pointing at the history JSON file
DEFAULT_HISTORY_FILE = "~/.fluidcalc/history.json"
