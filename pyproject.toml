[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "syslab"
version = "0.1.0"
description = "Systems programming toolkit: a tiny job-control shell, memory block bookkeeping and logging, robust I/O and a threaded counter demo"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "job control", "signals", "memory blocks", "robust io", "threads", "semaphore"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tsh = "syslab.shell:main"
syslab-counter = "syslab.counter:main"
myspin = "syslab.testprogs:myspin"
myint = "syslab.testprogs:myint"
mystop = "syslab.testprogs:mystop"
mysplit = "syslab.testprogs:mysplit"

[tool.setuptools.packages.find]
include = ["syslab*"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
