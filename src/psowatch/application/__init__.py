"""psowatch application layer (services, commands, queries, ports)."""
