[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "camfilters"
version = "0.1.0"
description = "Live webcam viewer that shows the mirrored camera feed through grayscale and Sobel filters, side by side or combined"
requires-python = ">=3.10"
keywords = ["webcam", "camera", "video", "filters", "sobel", "grayscale", "viewer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Display",
]
dependencies = [
    "numpy",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
camfilters = "camfilters.view:main"

[tool.hatch.build.targets.wheel]
packages = ["camfilters"]

[tool.pytest.ini_options]
addopts = "-ra"
