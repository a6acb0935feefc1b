"""psowatch infrastructure layer (persistence and notification adapters)."""
