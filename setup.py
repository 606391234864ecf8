"""
Installation setup for boostergen
"""
import configparser
import pathlib
from typing import List

import setuptools

# Establish project directory
project_root: pathlib.Path = pathlib.Path(__file__).resolve().parent

# Read config details to determine version-ing
config_file = project_root.joinpath("boostergen/resources/boostergen.properties")
config = configparser.ConfigParser()
if config_file.is_file():
    config.read(str(config_file))


def read_requirements(file_name: str) -> List[str]:
    """
    Read a requirements file, if able
    :param file_name: Requirements file beside this script
    :return: Requirement lines
    """
    requirements_file = project_root.joinpath(file_name)
    if not requirements_file.is_file():
        return []

    with requirements_file.open(encoding="utf-8") as file:
        return [line.strip() for line in file if line.strip() and not line.startswith("#")]


setuptools.setup(
    name="boostergen",
    version=config.get("BoosterGen", "version", fallback="1.0.0+fallback"),
    description="Booster pack generator for Magic: the Gathering releases",
    long_description=project_root.joinpath("README.md").open(encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: MacOS :: MacOS X",
        "Operating System :: Microsoft :: Windows :: Windows 10",
        "Operating System :: Unix",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python",
        "Topic :: Games/Entertainment",
    ],
    keywords=[
        "Booster",
        "Card Games",
        "Collectible",
        "MTG",
        "Scryfall",
        "Trading Cards",
        "Magic: The Gathering",
    ],
    python_requires=">=3.8",
    include_package_data=True,
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    package_data={"boostergen": ["resources/*.properties"]},
    install_requires=read_requirements("requirements.txt"),
    extras_require={"test": read_requirements("requirements_test.txt")},
    entry_points={"console_scripts": ["boostergen=boostergen.__main__:main"]},
)
