"""Turn-based dungeon crawler rules: grid, chasing enemies, duels, a final boss and a store."""

__version__ = "0.1.0"
__all__ = ["game", "models", "options", "session"]