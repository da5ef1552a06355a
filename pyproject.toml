[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mailparse"
version = "0.1.0"
description = "E-mail message model, quoted-printable decoding and Mbox/Maildir mailbox readers"
requires-python = ">=3.10"
dependencies = []
keywords = ["email", "mime", "rfc5322", "mbox", "maildir", "quoted-printable"]
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
    "Topic :: Communications :: Email",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mailparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
