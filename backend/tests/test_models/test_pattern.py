"""Tests for the Pattern wire model."""

import numpy as np
import pytest
from pydantic import ValidationError

from foamforge.models.pattern import Difficulty, Pattern


def test_cut_time_alias_both_ways():
    pattern = Pattern.model_validate({"name": "Wing", "estimatedCutTime": "12 mins"})
    assert pattern.estimated_cut_time == "12 mins"
    assert pattern.model_dump(by_alias=True)["estimatedCutTime"] == "12 mins"
    assert Pattern(name="Wing", estimated_cut_time="1 min").estimated_cut_time == "1 min"


@pytest.mark.parametrize(
    "raw, expected",
    [("hard", Difficulty.HARD), (" Easy ", Difficulty.EASY), ("extreme", Difficulty.MEDIUM), (None, Difficulty.MEDIUM)],
)
def test_difficulty_normalized(raw, expected):
    assert Pattern.model_validate({"name": "x", "difficulty": raw}).difficulty is expected


def test_frozen():
    pattern = Pattern(name="x")
    with pytest.raises(ValidationError):
        pattern.name = "y"


def test_with_points_copies():
    base = Pattern(name="Box", description="d")
    arr = np.array([[1.0, 2.0], [3.0, 4.0]])
    updated = base.with_points(arr)
    assert base.points == ()
    assert updated.name == "Box"
    assert updated.description == "d"
    np.testing.assert_array_equal(updated.as_array(), arr)


def test_empty_as_array_shape():
    assert Pattern(name="x").as_array().shape == (0, 2)
