#!/usr/bin/env python3

from pathlib import Path

from setuptools import find_namespace_packages, setup

packages = find_namespace_packages(include=("dotvalue", "dotvalue.*"))
package_data = {"dotvalue": ["config/*.yml"]}
install_requires = Path("requirements.txt").read_text().splitlines()

setup(
    name="DotValue",
    python_requires=">=3.8.2",
    version="0.1.0",
    description="Auto insert `.value` after reactive refs",
    long_description=Path("README.md").read_text(),
    long_description_content_type="text/markdown",
    packages=packages,
    package_data=package_data,
    install_requires=install_requires,
)
