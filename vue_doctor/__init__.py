"""Diagnose Vue.js projects for framework-specific anti-patterns."""

__version__ = "0.1.0"
