from __future__ import annotations

from typing import Iterator

import pytest

from lib_log_local.adapters.capture import CaptureDevice
from lib_log_local.adapters.logger import Logger
from lib_log_local.runtime import clear_default_logger


@pytest.fixture
def capture() -> CaptureDevice:
    return CaptureDevice()


@pytest.fixture
def parent(capture: CaptureDevice) -> Logger:
    return Logger(capture, level="info")


@pytest.fixture(autouse=True)
def reset_default_logger() -> Iterator[None]:
    try:
        yield
    finally:
        clear_default_logger()
