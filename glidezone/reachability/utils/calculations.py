# glidezone/reachability/utils/calculations.py
"""
Landing-distance arithmetic shared by the catalog loader and the envelope builder.
"""


class LandingCalculations:
    """Landing distance margins of a runway for a given required distance."""

    @staticmethod
    def inset(runway_length_m: float, required_m: float) -> float:
        """Usable overrun beyond the minimum stopping distance, never negative."""
        return max(0.0, runway_length_m - required_m)

    @staticmethod
    def headroom_ratio(runway_length_m: float, required_m: float) -> float:
        """Fraction of the required landing distance available beyond the base 100%."""
        if required_m <= 0:
            raise ValueError(f"Required landing distance must be positive, got {required_m}")
        return (runway_length_m - required_m) / required_m
