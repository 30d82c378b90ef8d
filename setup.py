#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="probcore",
    version="0.1.0",
    description="Special functions, random sources and continuous distributions on numpy/scipy",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",

    # this will find the probcore/ package (and any subpackages),
    # but exclude tests, docs, notebooks, etc.
    packages=find_packages(exclude=["tests*", "docs*", "notebooks*"]),

    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.25",
        "scipy>=1.11",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "flake8",
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

    include_package_data=False,
)
