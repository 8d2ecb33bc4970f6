[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dante"
version = "0.1.0"
description = "A small music library server that stores songs, albums and artists in MongoDB"
requires-python = ">=3.10"
keywords = ["music", "library", "server", "mongodb", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
    "pymongo",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dante = "dante.app:main"

[tool.hatch.build.targets.wheel]
packages = ["dante"]

[tool.pytest.ini_options]
addopts = "-ra"
