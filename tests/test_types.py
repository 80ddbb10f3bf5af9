import numpy as np
import pytest

from talawa.types import EpisodeStatus, Space, SpaceType, StepReport, Transition


def test_discrete_space_properties():
    space = Space.discrete(3)
    assert space.type is SpaceType.DISCRETE
    assert space.shape == (1,)
    assert space.n() == 3
    assert space.low(0) == 0.0
    assert space.high(0) == 3.0


def test_single_bound_applies_to_every_index():
    space = Space.discrete(4)
    assert space.low(7) == space.low(0)
    assert space.high(7) == space.high(0)


def test_continuous_space_per_index_bounds():
    space = Space.continuous([2], [0.0, -1.0], [5.0, 1.0])
    assert space.type is SpaceType.CONTINUOUS
    assert space.shape == (2,)
    assert space.low(1) == -1.0
    assert space.high(0) == 5.0
    assert space.raw_low == (0.0, -1.0)


def test_n_on_continuous_space_raises():
    space = Space.continuous([1], [0.0], [21.0])
    with pytest.raises(ValueError, match="Not Discrete"):
        space.n()


def test_step_report_defaults():
    report = StepReport()
    assert report.reward == 0.0
    assert report.episode_status is EpisodeStatus.RUNNING
    assert report.previous_state.size == 0
    assert report.action.size == 0


def test_step_reports_do_not_share_state():
    first = StepReport()
    second = StepReport()
    assert first.previous_state is not second.previous_state


def test_transition_keeps_fields():
    state = np.array([[1.0]])
    nxt = np.array([[2.0]])
    action = np.array([[0.0]])
    t = Transition(state, action, 0.5, nxt, EpisodeStatus.TERMINATED)
    assert t.reward == 0.5
    assert t.status is EpisodeStatus.TERMINATED
    assert np.array_equal(t.next_state, nxt)
    assert np.array_equal(t.state, state)