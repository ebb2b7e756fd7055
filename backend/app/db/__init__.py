"""MongoDB client lifecycle (motor)."""
