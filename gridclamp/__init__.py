"""Row line-budget allocation for clamped two-column card grids."""
