#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 bootcfg developers
#
# SPDX-License-Identifier: BSD-3-Clause

import os

from setuptools import find_packages, setup  # type: ignore

with open("requirements.txt") as req_file:
    requirements = req_file.read().splitlines()

with open("requirements-develop.txt") as req_file:
    test_requirements = [
        line for line in req_file.read().splitlines() if line and not line.startswith("-r")
    ]

version: dict = {}
with open(os.path.join("bootcfg", "__version__.py")) as version_file:
    exec(version_file.read(), version)  # nosec: exec_used

long_description = ""
if os.path.isfile("README.md"):
    with open("README.md", "r") as f:
        long_description = f.read()

extras_require = {
    "test": test_requirements,
}

setup(
    name="bootcfg",
    version=version["__version__"],
    description="Boot loader build configurator for MIPS router firmware",
    author="bootcfg developers",
    license="BSD-3-Clause",
    long_description=long_description,
    long_description_content_type="text/markdown",
    platforms="Windows, Linux, Mac OSX",
    python_requires=">=3.9",
    install_requires=requirements,
    include_package_data=True,
    package_data={"bootcfg": ["data/*.yaml"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: POSIX :: Linux",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: MacOS :: MacOS X",
        "License :: OSI Approved :: BSD License",
        "Topic :: Software Development :: Embedded Systems",
        "Topic :: Software Development :: Build Tools",
        "Topic :: Utilities",
    ],
    packages=find_packages(exclude=["tests.*", "tests"]),
    entry_points={
        "console_scripts": [
            "bootcfg=bootcfg.apps.bootcfg:safe_main",
        ],
    },
    extras_require=extras_require,
)
