"""Diagnostics package.

- diagnostics.spacing: spacing statistics and plots of a timeline's occurrences
  (requires the diagnostics extras: numpy, matplotlib)
"""

__all__ = ["spacing"]
