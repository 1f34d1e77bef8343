from pathlib import Path

import pytest

_FD_DIR = Path("/proc/self/fd")


def pytest_configure(config):
    config.addinivalue_line("markers", "fd: mark test as counting open file descriptors (requires /proc/self/fd)")


def pytest_collection_modifyitems(config, items):
    if _FD_DIR.is_dir():
        return
    skip_fd = pytest.mark.skip(reason="/proc/self/fd not available")
    for item in items:
        if "fd" in item.keywords:
            item.add_marker(skip_fd)
