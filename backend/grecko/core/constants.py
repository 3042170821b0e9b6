"""Shared GPA constants.

The grading scale is fixed; these are not settings on purpose so every
calculation and classification agrees on the same ceiling.
"""

# Top of the grading scale
GPA_SCALE_MAX = 4.0

# Required average shown when no courses remain
NO_REMAINING_SENTINEL = "---"

# Required average of a freshly created goal record
DEFAULT_REQUIRED_GPA = "0.00"

# Trend point shown when a user has no history yet (display only)
START_LABEL = "Start"

# Prefix for snapshots produced by the course calculator, e.g. "Calc Nov 12"
CALC_LABEL_PREFIX = "Calc"
