"""Utilities for dalgen: DSL front end, logging and error handling."""
