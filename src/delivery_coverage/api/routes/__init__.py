"""Route group exports."""

from . import coverage, health, orders

__all__ = ["coverage", "health", "orders"]
