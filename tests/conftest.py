import os

os.environ.setdefault("TF_CPP_MIN_LOG_LEVEL", "3")

import pytest

from mandelbrot_explorer import ViewState


@pytest.fixture
def initial_view():
    return ViewState.initial()
