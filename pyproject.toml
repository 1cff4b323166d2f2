[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lasgun"
version = "0.1.0"
description = "Ray tracing building blocks: cameras, RGBA film, Morton ordering and physically based scattering models."
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = [
    "ray tracing",
    "rendering",
    "bxdf",
    "microfacet",
    "fresnel",
    "morton",
    "oren-nayar",
    "graphics",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lasgun"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
