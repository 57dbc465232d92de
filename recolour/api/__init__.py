"""HTTP surface of the recolour workflow."""
