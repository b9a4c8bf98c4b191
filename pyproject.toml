[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "paristrace"
version = "0.1.0"
description = "Address handling, ping statistics and ICMP classification, and the multipath (MDA) probe-count bound for route discovery tools"
requires-python = ">=3.10"
dependencies = []
keywords = ["ping", "mda", "multipath", "traceroute", "load balancing", "networking", "icmp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
paristrace-bound = "paristrace.bound:main"

[tool.hatch.build.targets.wheel]
packages = ["paristrace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
