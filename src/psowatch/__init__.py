"""psowatch - role-based administration and supervisor reassignment for PSOs."""

__version__ = "0.1.0"
