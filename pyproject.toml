[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zandoli"
version = "0.1.0"
description = "Local network host inventory: frame decoding, protocol analyzers, PCAP analysis, host classification and JSON, CSV and HTML reports"
requires-python = ">=3.10"
keywords = [
    "network",
    "reconnaissance",
    "pcap",
    "arp",
    "lldp",
    "cdp",
    "netbios",
    "dns",
    "host-discovery",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Information Technology",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
    "Topic :: System :: Networking",
]
dependencies = [
    "pyyaml",
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["zandoli"]

[tool.hatch.build.targets.sdist]
include = [
    "zandoli",
    "tests",
    "README.md",
]

[tool.pytest.ini_options]
addopts = "-ra"
