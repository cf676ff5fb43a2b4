import pytest

from game.asteroids.audio import AudioSink
from game.asteroids.game import AsteroidsGame
from game.asteroids.utils import seed_everything


class FakeClock:
    """Manually advanced wall clock"""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class RecordingAudio(AudioSink):
    def __init__(self):
        self.played = []
        self.thrust = []

    def play(self, effect, param=None):
        self.played.append((effect, param))

    def set_thrust(self, active):
        self.thrust.append(active)

    def count(self, effect):
        return sum(1 for e, _ in self.played if e is effect)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def game(clock, audio):
    seed_everything(1234)
    return AsteroidsGame(width=800, height=600, audio=audio, clock=clock)
