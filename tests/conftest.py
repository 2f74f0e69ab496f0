from dataclasses import replace

import pytest

from fm_formatter.models import FMSetup

from tests.helpers import TUNED, build_setup


@pytest.fixture
def setup() -> FMSetup:
    return build_setup()


@pytest.fixture
def tuned_setup() -> FMSetup:
    """A setup with a filled-in tune and a few upgrades."""
    return replace(build_setup(TUNED), make="Porsche", model="911 GT3")
