from typing import cast

import pytest
from freezegun import freeze_time

from ephemeralpaste.types import LambdaContext
from ephemeralpaste.service import PasteService
from ephemeralpaste.dao.memory import PasteMemoryDAO


@pytest.fixture(autouse=True)
def frozen_wall_clock(t0):
    """Align the handlers' wall clock with the store clock."""
    with freeze_time(t0):
        yield


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'ephemeralpaste'})


@pytest.fixture
def service(clock) -> PasteService:
    return PasteService(PasteMemoryDAO(clock=clock), clock=clock)
