import re
from pathlib import Path

from setuptools import setup

version = re.search(r'^__version__ = "(.+)"$', (Path(__file__).parent / "xread" / "__init__.py").read_text(), re.M).group(1)

setup(
    name="xread",
    version=version,
    description="Open files for reading, transparently decompressing .zst, .xz, .gz and .bz2 by suffix.",
    packages=["xread", "xread.cli"],
    package_data={"xread": ["__init__.pyi"]},
    python_requires=">=3.9",
    install_requires=[
        "zstandard>=0.15",
        "cyclopts>=2.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["xread=xread.cli.main:run_app"],
    },
)
