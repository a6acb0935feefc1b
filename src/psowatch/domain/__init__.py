"""psowatch domain layer."""
