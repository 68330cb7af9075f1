"""Shared utilities."""

from .logging_setup import setup_logging, log_operation

__all__ = ['setup_logging', 'log_operation']
