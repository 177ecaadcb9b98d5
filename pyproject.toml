[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nodeflow"
version = "0.1.0"
description = "Headless node-graph data-flow models: graphs, ports, connections and calculator nodes"
requires-python = ">=3.10"
dependencies = []
keywords = ["node-graph", "dataflow", "graph-model", "nodes", "calculator"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nodeflow-calculator = "nodeflow.headless:main"

[tool.hatch.build.targets.wheel]
packages = ["nodeflow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
