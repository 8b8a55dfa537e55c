from __future__ import annotations

# Positional epsilon for near-zero distance/length checks.
EPS_POS = 1e-12

# Area epsilon for degenerate triangle checks.
EPS_AREA = 1e-12

# Linear-block volume ratio (|det| over product of column norms) below which a transform is singular.
EPS_SINGULAR = 1e-12

# Absolute tolerance for element-wise transform matrix comparison.
EPS_MATRIX = 1e-9
