"""
Generic utility functions shared across modules.

Includes the date/time helpers (parsing, leap years, timespans, clock angles),
logging setup, and their error classes.
"""
