"""Package metadata for aqlstore (flat-file person store + `aql` CLI)."""

from setuptools import find_packages, setup

setup(
    name="aqlstore",
    version="0.1.0",
    description="Flat-file person record store with a human-readable line format",
    python_requires=">=3.11",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "click>=8.1",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": ["aql = aqlstore.cli:main"],
    },
)
