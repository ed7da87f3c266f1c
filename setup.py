#!/usr/bin/env python

from setuptools import setup

setup(
    name="shareext",
    version="0.1.0",
    packages=[
        "shareext",
        "shareext.details",
        "shareext.xcode",
    ],
    python_requires=">=3.9",
    install_requires=["pbxproj"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["shareext = shareext.__main__:main"]},
)
