"""
Core module for shared domain infrastructure.

This module contains:
- Domain events and exceptions
- The in-process notification bus
- Configuration, metrics and tracing helpers
"""
