"""
Targeting Math Tests
====================

Unit tests for distance, heading and normalization.
"""

import math
import os
import pytest

import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from limelight_targeting.utils.targeting_math import (
    FAR_DISTANCE, MAX_DISTANCE, MIN_DISTANCE,
    calculate_angle_radians, calculate_distance, clamp, normalize
)


class TestCalculateDistance:
    """Test distance from vertical offset."""

    def test_known_geometry(self):
        """Test a camera below the target looking up."""
        # 24in rise at 45 degrees -> 24in away
        distance = calculate_distance(ty=30.0, target_height=36.0,
                                      limelight_height=12.0, limelight_angle=15.0)
        assert distance == pytest.approx(24.0)

    def test_horizontal_sightline_returns_sentinel(self):
        """Test exactly 1000.0 when the sightline is horizontal."""
        assert calculate_distance(-15.0, 36.0, 40.0, 15.0) == FAR_DISTANCE
        assert FAR_DISTANCE == 1000.0

    def test_near_horizontal_sightline_returns_sentinel(self):
        """Test the sentinel below 0.01 rad and not above it."""
        just_inside = math.degrees(0.0099)
        assert calculate_distance(just_inside - 15.0, 36.0, 40.0, 15.0) == 1000.0

        just_outside = math.degrees(0.0101)
        assert calculate_distance(just_outside - 15.0, 36.0, 40.0, 15.0) != 1000.0

    def test_clamped_to_zero(self):
        """Test negative results clamp to 0 (target below a tilted-up camera)."""
        # Camera 40in, tag 36in, looking up -> negative raw distance
        assert calculate_distance(0.0, 36.0, 40.0, 15.0) == MIN_DISTANCE

    def test_clamped_to_max(self):
        """Test far targets clamp to 200."""
        distance = calculate_distance(ty=-14.0, target_height=36.0,
                                      limelight_height=12.0, limelight_angle=15.0)
        assert distance == MAX_DISTANCE

    def test_camera_above_target_looking_down(self):
        """Test a camera looking down at a floor-level ball."""
        distance = calculate_distance(ty=-30.0, target_height=1.5,
                                      limelight_height=40.0, limelight_angle=-15.0)
        assert distance == pytest.approx(38.5)

    @pytest.mark.parametrize("ty", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_offset_returns_sentinel(self, ty):
        """Test inf and NaN readings never raise and give the sentinel."""
        assert calculate_distance(ty, 36.0, 40.0, 15.0) == FAR_DISTANCE

    @pytest.mark.parametrize("ty", [-40.0, -20.0, -5.0, 0.0, 5.0, 20.0, 40.0])
    def test_always_in_range_or_sentinel(self, ty):
        """Test every result is in [0, 200] or the sentinel."""
        distance = calculate_distance(ty, 36.0, 12.0, 15.0)
        assert distance == FAR_DISTANCE or MIN_DISTANCE <= distance <= MAX_DISTANCE


class TestHeadingAndNormalize:
    """Test heading conversion and screen normalization."""

    def test_heading_is_radians(self):
        """Test heading is the exact degree-to-radian conversion."""
        assert calculate_angle_radians(5.0) == math.radians(5.0)
        assert calculate_angle_radians(-29.8) == math.radians(-29.8)
        assert calculate_angle_radians(0.0) == 0.0

    def test_normalize(self):
        """Test normalization by half field of view."""
        assert normalize(14.9, 29.8) == pytest.approx(0.5)
        assert normalize(-24.85, 24.85) == pytest.approx(-1.0)

    def test_normalize_not_clamped(self):
        """Test values beyond the field of view are passed through."""
        assert normalize(31.0, 29.8) > 1.0
        assert normalize(-31.0, 29.8) < -1.0


class TestClamp:
    """Test clamp helper."""

    def test_clamp(self):
        assert clamp(5.0, 0.0, 10.0) == 5.0
        assert clamp(-1.0, 0.0, 10.0) == 0.0
        assert clamp(11.0, 0.0, 10.0) == 10.0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
