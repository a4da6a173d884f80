[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kernkit"
version = "0.1.0"
description = "Kernel building blocks as plain Python objects: synchronisation primitives, a buffer cache, virtual memory bookkeeping, a first-fit heap, printf formatting and a framebuffer."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "kernel",
    "operating-system",
    "semaphore",
    "bounded-buffer",
    "buffer-cache",
    "virtual-memory",
    "heap",
    "printf",
    "rope",
    "vga",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kernkit"]

[tool.pytest.ini_options]
addopts = "-ra"
