"""
Configuration loading and validation for settings.

Provides a strongly typed settings object read from environment variables
with upfront validation.
"""
