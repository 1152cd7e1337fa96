"""
Core journal and export logic.

This package is framework-agnostic - it doesn't import FastAPI or touch
the file system. Flattening and encoding can be tested in isolation.
"""
