"""
Reshaping and summary statistics.

Includes the wide-to-long reshape, the two-year pivot, trend-line fits and
per-season summaries used by the charts.
"""
