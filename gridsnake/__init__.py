"""Authoritative server for a multiplayer snake game on a wrapping grid."""

__all__ = [
    "collision",
    "constants",
    "food",
    "main",
    "protocol",
    "session",
    "snake",
    "utils",
    "world",
]
