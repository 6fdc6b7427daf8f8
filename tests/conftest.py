import random

import pytest

from bracketeer.participant import Participant


def make_participants(count):
    return [
        Participant(f"Player{i + 1}", "Test", participant_id=f"p{i + 1}")
        for i in range(count)
    ]


@pytest.fixture
def participants():
    return make_participants(8)


@pytest.fixture
def rng():
    return random.Random(1234)
