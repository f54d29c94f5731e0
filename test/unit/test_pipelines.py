"""
Pipeline Control Tests
======================

Unit tests for Pipeline and PipelineController.
"""

import os
import pytest

import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from limelight_targeting.core.config import PipelineConfig
from limelight_targeting.core.errors import InvalidPipelineRequest
from limelight_targeting.vision.pipelines import (
    Pipeline, PipelineController, pipeline_indices
)
from limelight_targeting.vision.target import BallColor


class TestPipeline:
    """Test Pipeline enum."""

    def test_pipeline_values(self):
        """Test all pipelines exist."""
        assert Pipeline.PURPLE_BALL
        assert Pipeline.GREEN_BALL
        assert Pipeline.PILLAR_TAGS
        assert Pipeline.CENTER_TAGS

    def test_default_indices(self):
        """Test default camera slot numbers."""
        indices = pipeline_indices()

        assert indices[Pipeline.PURPLE_BALL] == 0
        assert indices[Pipeline.GREEN_BALL] == 1
        assert indices[Pipeline.PILLAR_TAGS] == 2
        assert indices[Pipeline.CENTER_TAGS] == 3

    def test_configured_indices(self):
        """Test slot numbers come from config."""
        indices = pipeline_indices(PipelineConfig(purple_ball=7, center_tags=9))

        assert indices[Pipeline.PURPLE_BALL] == 7
        assert indices[Pipeline.CENTER_TAGS] == 9

    def test_for_color(self):
        assert Pipeline.for_color(BallColor.PURPLE) is Pipeline.PURPLE_BALL
        assert Pipeline.for_color(BallColor.GREEN) is Pipeline.GREEN_BALL

    def test_for_color_none(self):
        with pytest.raises(InvalidPipelineRequest):
            Pipeline.for_color(BallColor.NONE)


class TestPipelineController:
    """Test switch-on-change behaviour."""

    def test_initial_pipeline(self, make_transport):
        """Test the controller starts on pillar tags without switching."""
        transport = make_transport()
        controller = PipelineController(transport)

        assert controller.current_pipeline() is Pipeline.PILLAR_TAGS
        assert transport.switch_calls == []

    def test_switch_issues_one_call(self, make_transport):
        """Test a change issues exactly one switch with the right index."""
        transport = make_transport()
        controller = PipelineController(transport)

        assert controller.switch_to(Pipeline.CENTER_TAGS) == True
        assert transport.switch_calls == [3]
        assert controller.current is Pipeline.CENTER_TAGS

    def test_repeat_switch_is_noop(self, make_transport):
        """Test switching to the active pipeline issues nothing."""
        transport = make_transport()
        controller = PipelineController(transport)

        controller.switch_to(Pipeline.CENTER_TAGS)
        assert controller.switch_to(Pipeline.CENTER_TAGS) == False
        assert controller.switch_to_pillar_tags() == True
        assert controller.switch_to_pillar_tags() == False

        assert transport.switch_calls == [3, 2]

    def test_unacknowledged_switch_still_tracked(self, make_transport):
        """Test fire-and-forget: state updates even if the camera did not ack."""
        transport = make_transport(switch_ok=False)
        controller = PipelineController(transport)

        controller.switch_to(Pipeline.GREEN_BALL)

        assert controller.current is Pipeline.GREEN_BALL
        assert transport.switch_calls == [1]

    def test_sync_always_sends(self, make_transport):
        """Test sync() sends the tracked pipeline even when unchanged."""
        transport = make_transport()
        controller = PipelineController(transport)

        controller.sync()
        controller.sync()

        assert transport.switch_calls == [2, 2]

    def test_ball_pipelines(self, make_transport):
        """Test colour pipeline switching."""
        transport = make_transport()
        controller = PipelineController(transport)

        controller.switch_to_ball_pipeline(BallColor.PURPLE)
        controller.switch_to_ball_pipeline(BallColor.GREEN)
        controller.switch_to_ball_pipeline(BallColor.GREEN)

        assert transport.switch_calls == [0, 1]

    def test_ball_pipeline_none_raises(self, make_transport):
        """Test NONE colour is rejected without touching the camera."""
        transport = make_transport()
        controller = PipelineController(transport)

        with pytest.raises(InvalidPipelineRequest):
            controller.switch_to_ball_pipeline(BallColor.NONE)

        # Also a ValueError for callers that do not know the package errors
        with pytest.raises(ValueError):
            controller.switch_to_ball_pipeline(BallColor.NONE)

        assert transport.switch_calls == []
        assert controller.current is Pipeline.PILLAR_TAGS

    def test_switch_rejects_non_pipeline(self, make_transport):
        controller = PipelineController(make_transport())

        with pytest.raises(TypeError):
            controller.switch_to(3)

    def test_configured_indices_used(self, make_transport):
        """Test switches send the configured slot numbers."""
        transport = make_transport()
        controller = PipelineController(transport, PipelineConfig(center_tags=8))

        controller.switch_to_center_tags()

        assert transport.switch_calls == [8]
        assert controller.index_of(Pipeline.CENTER_TAGS) == 8


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
