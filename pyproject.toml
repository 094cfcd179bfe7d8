[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imtools"
version = "0.1.0"
description = "Utility toolkit for instant-messaging services: data helpers, crypto, time, networking, HTTP, TLS and service process management."
requires-python = ">=3.10"
keywords = [
    "utilities",
    "datautil",
    "aes",
    "md5",
    "timeutil",
    "http-client",
    "tls",
    "process-management",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Systems Administration",
    "Typing :: Typed",
]
dependencies = [
    "cryptography",
    "psutil",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["imtools"]

[tool.hatch.build.targets.sdist]
include = [
    "imtools",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
