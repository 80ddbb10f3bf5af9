[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "talawa"
version = "0.1.0"
description = "Small reinforcement-learning, evolution and neural-network building blocks: environments, agents, Q-tables, arenas, losses and pooling layers."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "reinforcement-learning",
    "q-learning",
    "genetic-algorithm",
    "neural-network",
    "machine-learning",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["talawa"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
