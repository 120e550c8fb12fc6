"""Testing utilities for DomNav consumers."""

from .fixtures import TreeShapeHelper

__all__ = ['TreeShapeHelper']
