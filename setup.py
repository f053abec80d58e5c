"""Setup for Workout Timer.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import find_packages, setup

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "WorkoutTimer",
        "CFBundleDisplayName": "Workout Timer",
        "CFBundleIdentifier": "com.example.workouttimer",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
        "LSUIElement": False,
    },
}

# py2app only exists on macOS; only pull it in when building the bundle.
APP_KWARGS = (
    {
        "app": APP,
        "data_files": DATA_FILES,
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }
    if "py2app" in sys.argv
    else {}
)

setup(
    name="WorkoutTimer",
    version="0.1.0",
    description="Stopwatch-style workout timer with a one-shot target alert",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.5",
        "numpy>=1.24",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "gui_scripts": ["workouttimer = workouttimer.__main__:main"],
    },
    **APP_KWARGS,
)
