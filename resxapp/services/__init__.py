"""Host-side services for the ResX engine."""
