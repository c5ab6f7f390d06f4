#!/usr/bin/env python

# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Setuptools installer for nntpstore.
"""

import pathlib

import setuptools

setuptools.setup(
    name="nntpstore",
    use_incremental=True,
    setup_requires=["incremental >= 22.10.0"],
    description="Persistent group and article storage for NNTP servers",
    long_description=pathlib.Path("README.rst").read_text(encoding="utf8"),
    long_description_content_type="text/x-rst",
    license="MIT",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=setuptools.find_packages("src"),
    package_data={"nntpstore": ["migrations/*.py"]},
    install_requires=[
        "Twisted >= 22.10.0",
        "zope.interface >= 5",
        "attrs >= 22.2.0",
        "incremental >= 22.10.0",
        "yoyo-migrations >= 8.2",
    ],
    include_package_data=True,
    zip_safe=False,
)
