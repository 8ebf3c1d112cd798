"""
Configuration, logging, wiring and file helpers.
"""
