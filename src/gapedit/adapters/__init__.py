"""Front ends that drive the edit engine."""
