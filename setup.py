"""setuptools setup for PomoTask.

Install for development:
    pip install -e ".[test]"
    python -m pomotask
"""

from setuptools import setup, find_packages

setup(
    name="PomoTask",
    version="0.1.0",
    description="Pomodoro timer that credits focus sessions to tasks",
    packages=find_packages(include=["pomotask", "pomotask.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.5",
        "SQLAlchemy>=2.0",
        "numpy>=1.24",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "gui_scripts": ["pomotask = pomotask.__main__:main"],
    },
)
