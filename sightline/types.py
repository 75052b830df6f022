from __future__ import annotations

# =============================================================================
# SPATIAL TYPES
# =============================================================================

TileCoord = int  # Always integer tile position

# Grid coordinates - absolute cell positions on the map
CellPos = tuple[TileCoord, TileCoord]  # Example: (5, 3) = cell 5,3

# Continuous coordinates - sub-cell observer position, rounds to a CellPos
WorldPos = tuple[float, float]  # Example: (5.4, 2.8) -> cell (5, 3)

# Flat row-major cell index: y * width + x
CellIndex = int
