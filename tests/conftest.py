"""
Shared fixtures: a small night-market scene.
"""

import pytest

from models import Environment
from scene_state import SceneSession


@pytest.fixture
def environment():
    return Environment(
        description="a crowded night market",
        style="cinematic",
        lighting="neon lighting",
        camera_angle="eye-level shot",
        shot_type="medium shot",
        camera_movement="static camera",
    )


@pytest.fixture
def session(environment):
    return SceneSession(environment=environment, negative_prompt="blurry", with_default_character=False)


@pytest.fixture
def market_scene(session):
    """One Javanese man saying hello."""
    hero = session.add_character(race="Indonesia-Jawa", gender="Pria", age="25", look_at_camera=False)
    session.add_dialogue(hero.id, text="Hello")
    return session
