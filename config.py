"""Central configuration for pencil sketch rendering.

All tunable parameters are defined here with descriptive names.
These values can be adjusted to change the default look of the sketches.
"""

# =============================================================================
# FILTER DEFAULTS
# =============================================================================

# Gaussian kernel size used when the caller does not pass one (must be odd)
DEFAULT_BLUR_KERNEL = 21

# Gaussian standard deviation used when the caller does not pass one
DEFAULT_SIGMA = 21.0

# Weight of the original colors in the color sketch (0 = pure sketch, 1 = original)
DEFAULT_COLOR_STRENGTH = 0.8

# =============================================================================
# COLOR DODGE
# =============================================================================

# Added to the dodge divisor so a fully white blur layer never divides by zero.
# With 1, a white pixel on a black blur layer maps to 255 * 255 / 256 = 254.
DODGE_EPSILON = 1.0

# =============================================================================
# PRESET MAPPING
# =============================================================================

# detail in [0, 1] -> blur kernel: round(BASE + detail * SPAN), clamped, made odd
PRESET_KERNEL_BASE = 9
PRESET_KERNEL_SPAN = 30
PRESET_KERNEL_MIN = 3
PRESET_KERNEL_MAX = 39

# intensity in [0, 1] -> sigma: BASE + intensity * SPAN
PRESET_SIGMA_BASE = 18.0
PRESET_SIGMA_SPAN = 62.0

# intensity in [0, 1] -> color strength: BASE + intensity * SPAN
PRESET_COLOR_STRENGTH_BASE = 0.68
PRESET_COLOR_STRENGTH_SPAN = 0.22

# =============================================================================
# COMMAND LINE
# =============================================================================

# File format used for intermediates written by --save-steps
STEP_ARTIFACT_EXTENSION = ".png"
