import pytest

import lc3vm.runtime.cpu as cpu


@pytest.fixture
def machine():
    yield cpu.Machine()
