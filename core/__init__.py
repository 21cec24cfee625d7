"""Shared infrastructure for the tower puzzle front ends."""

from core.settings import Settings

__all__ = ["Settings"]
