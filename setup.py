"""Package setup for fbx_exporter."""

from setuptools import setup, find_packages

setup(
    name="fbx-exporter",
    version="0.0.1",
    description="Authenticated client for the Freebox local HTTP API",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.32.0",
        "urllib3>=2.0.0",
        "colorlog>=6.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fbx-exporter=fbx_exporter.cli:main",
        ],
    },
)
