[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "alarmaciom"
version = "1.0.0"
description = "A desktop alarm clock with named, weekly-repeating alarms kept in a plain text file"
requires-python = ">=3.10"
dependencies = []
keywords = ["alarm", "alarm clock", "clock", "reminder", "desktop", "tkinter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Spanish",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
alarmaciom = "alarmaciom.ui:main"

[tool.hatch.build.targets.wheel]
packages = ["alarmaciom"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
