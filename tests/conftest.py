import pytest
from fastapi.testclient import TestClient

from app.security import limiter
from main import app


def make_characters():
    return [
        {"id": 1, "name": "Eleven", "real_name": "Jane Hopper", "nickname": "El", "status": "Alive",
         "occupation": "Student", "portrayed_by": "Millie Bobby Brown",
         "powers": ["Telekinesis", "Remote viewing"], "seasons": [1, 2, 3, 4]},
        {"id": 2, "name": "Mike Wheeler", "status": "Alive", "occupation": "Student",
         "portrayed_by": "Finn Wolfhard", "powers": [], "seasons": [1, 2, 3, 4]},
        {"id": 3, "name": "Barb Holland", "status": "Deceased", "occupation": "Student",
         "portrayed_by": "Shannon Purser", "powers": [], "seasons": [1]},
        {"id": 4, "name": "Bob Newby", "status": "Deceased", "occupation": "RadioShack Manager",
         "portrayed_by": "Sean Astin", "powers": [], "seasons": [2]},
        {"id": 5, "name": "Jim Hopper", "status": "Alive", "occupation": "Chief of Police",
         "portrayed_by": "David Harbour", "powers": [], "seasons": [1, 2, 3, 4]},
        {"id": 6, "name": "Billy Hargrove", "status": "Deceased", "occupation": "Lifeguard",
         "portrayed_by": "Dacre Montgomery", "powers": [], "seasons": [2, 3]},
        {"id": 7, "name": "Henry Creel", "nickname": "One", "occupation": "Orderly",
         "portrayed_by": "Jamie Campbell Bower", "powers": ["Telekinesis"], "seasons": [4]},
    ]


def make_quotes():
    return [
        {"id": 1, "quote": "Friends don't lie.", "character": "Eleven", "character_id": 1, "season": 1, "episode": 5},
        {"id": 2, "quote": "Mornings are for coffee and contemplation.", "character": "Jim Hopper",
         "character_id": 5, "season": 1, "episode": 1},
        {"id": 3, "quote": "Bitchin'.", "character": "Eleven", "character_id": 1, "season": 1, "episode": 6},
        {"id": 4, "quote": "Ahoy, ladies.", "character": "Robin Buckley", "character_id": 12, "season": 3, "episode": 1},
        {"id": 5, "quote": "Mouth-breather.", "character": "Eleven", "character_id": 1, "season": 1, "episode": 7},
    ]


def make_episodes():
    return [
        {"id": 1, "title": "Chapter One: The Vanishing of Will Byers", "season": 1, "episode": 1,
         "air_date": "2016-07-15", "synopsis": "Will disappears on his way home."},
        {"id": 2, "title": "Chapter Two: The Weirdo on Maple Street", "season": 1, "episode": 2,
         "air_date": "2016-07-15", "synopsis": "The boys hide the girl from the woods."},
        {"id": 9, "title": "Chapter One: MADMAX", "season": 2, "episode": 1,
         "air_date": "2017-10-27", "synopsis": "A new high score appears at the arcade."},
    ]


def make_creatures():
    return [
        {"id": 1, "name": "Demogorgon", "classification": "Apex predator", "origin": "The Upside Down",
         "description": "A faceless predator.", "threat_level": "High", "image_path": "/images/demogorgon.jpg"},
        {"id": 2, "name": "Mind Flayer", "classification": "Hive mind", "origin": "The Upside Down",
         "description": "A colossal shadow entity.", "threat_level": "Extreme", "image_path": "/images/mind-flayer.jpg"},
    ]


def make_locations():
    return [
        {"id": 1, "name": "Hawkins", "type": "Town", "description": "A small town in Indiana.",
         "significance": "Where everything happens."},
        {"id": 2, "name": "Starcourt Mall", "type": "Shopping mall", "description": "A new mall.",
         "significance": "Hides a Soviet base."},
    ]


@pytest.fixture
def collections():
    return {
        "characters": make_characters(),
        "creatures": make_creatures(),
        "episodes": make_episodes(),
        "locations": make_locations(),
        "quotes": make_quotes(),
    }


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Every test starts with empty rate limit counters."""
    limiter.reset()
    yield


@pytest.fixture
def client():
    # Entering the context runs the lifespan, which loads the shipped data/ directory.
    with TestClient(app) as test_client:
        yield test_client
