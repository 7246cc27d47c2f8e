[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "procsys"
version = "0.1.0"
description = "Read and tune Linux kernel settings and system information from /proc"
requires-python = ">=3.10"
dependencies = []
keywords = ["linux", "procfs", "sysctl", "kernel", "proc", "sysvipc", "binfmt_misc"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System Kernels :: Linux",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["procsys"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
