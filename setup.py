#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from glob import glob
from os.path import basename
from os.path import splitext

from setuptools import find_packages
from setuptools import setup


setup(
    name="ojitype",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="Canadian Aboriginal syllabics input method and composition table builder",
    long_description="Builds the Ojitype composition table from the syllabics character data table and composes keystrokes into syllabics.",
    author="Rose Davidson",
    author_email="rose@metaclassical.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    py_modules=[splitext(basename(path))[0] for path in glob("src/*.py")],
    package_data={"ojitype.data": ["*.txt"]},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Text Processing :: Linguistic",
    ],
    keywords=["syllabics", "input method", "ojibwe", "cree"],
    python_requires=">=3.10",
    install_requires=[
        "cattrs>=22.2.0",
        "msgspec>=0.18.0",
        "pygtrie>=2.4.2",
        "trio>=0.22.0",
    ],
    extras_require={
        "test": ["pytest>=6.2.4", "pytest-trio>=0.8.0"],
    },
    entry_points={
        "console_scripts": [
            "ojitype-buildtable = ojitype.scripts:buildtable_cli",
            "ojitype-type = ojitype.scripts:type_keys_cli",
        ],
    },
)
