"""
Installs NoBounds
"""

import re

from setuptools import find_packages, setup


# Get package information
def get_package_info():
    """
    Gets version information for the installation.
    """
    # Set up variables
    package_version = None

    # Open the file containing version info
    with open("nobounds/__init__.py", "r", encoding="utf-8") as file:
        for line in file:
            # Check version
            if match_obj := re.match(r"__version__.+([0-9]+\.[0-9]+\.[0-9]+)", line):
                package_version = match_obj.group(1)

    # Checks on variables
    if package_version is None:
        raise IOError("Could not find information on version.")

    return package_version


# Run setup
setup(
    name="nobounds",
    version=get_package_info(),
    description=(
        "Bounded univariate distributions transformed to the real line for MCMC"
    ),
    packages=find_packages(include=["nobounds", "nobounds.*"]),
    python_requires=">=3.10",
    install_requires=["numpy", "scipy", "torch>=2.2", "typeguard>=4"],
    extras_require={"test": ["pytest"]},
)
