"""
External dataset sources.

Thin HTTP clients for datasets supplied by the runtime environment rather than
shipped with the repository (e.g. R's ChickWeight via the Rdatasets mirror).
"""
