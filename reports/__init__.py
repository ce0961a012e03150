"""reports package - CMD assessment report generation."""
