"""schemas package - pydantic data contracts for CMD assessments."""
