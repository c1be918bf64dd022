"""
Chart renderers and styling.

Each renderer returns a chart object (matplotlib Axes or seaborn FacetGrid)
that callers can label, limit and save.
"""
