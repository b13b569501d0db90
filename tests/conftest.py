import pytest

from kappa.analysis import parse
from kappa.evaluation import execute
from kappa.reader import read
from kappa.types.environment import Environment
from kappa.types.singletons import Void


def run_source(source, env=None):
    """Read, analyse and execute every form, threading definitions through."""
    env = env if env is not None else Environment()
    result = Void
    for node in read(source):
        result, env = execute(parse(node, env), env)
    return result


@pytest.fixture
def env():
    """Fresh, empty top-level environment."""
    return Environment()


@pytest.fixture
def run():
    return run_source
