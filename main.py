"""
tidy_temps – Main entry point.

Runs both walkthrough sections in order: the temperature reshaping charts,
then the ChickWeight distribution charts.
"""

import sys

from actions import render_chick_weight_charts, render_temperature_charts


def main() -> int:
    """Run every walkthrough section; stop at the first failure."""
    for section in (render_temperature_charts, render_chick_weight_charts):
        status = section.main([])
        if status != 0:
            return status
    return 0


if __name__ == "__main__":
    sys.exit(main())
