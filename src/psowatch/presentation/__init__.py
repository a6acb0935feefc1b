"""psowatch presentation layer (REST API and CLI)."""
