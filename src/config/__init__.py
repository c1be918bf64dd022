"""
Configuration loading and validation.

Provides strongly typed settings objects for input paths, comparison years,
the growth dataset mirror and chart export, with upfront validation.
"""
