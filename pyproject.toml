[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lexdef"
version = "0.1.0"
description = "Token pattern front end: regex parsing into a canonical tree, priorities, case folding, subpatterns and callback outcomes"
requires-python = ">=3.10"
dependencies = []
keywords = ["lexer", "regex", "tokenizer", "code generation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lexdef"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
