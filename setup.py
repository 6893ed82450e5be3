import pathlib

from setuptools import find_packages
from setuptools import setup


def find_required():
    with open("requirements.txt") as f:
        return f.read().splitlines()


def find_tests_required():
    with open("tests/requirements.txt") as f:
        return f.read().splitlines()


def get_version(filename='mediastack/version'):
    return open(filename, "r").read().strip()


HERE = pathlib.Path(__file__).parent
README = open("README.md").read()
setup(
    name="mediastack",
    version=get_version(),
    description="docker compose media stack deployment orchestrator",
    long_description=README,
    long_description_content_type="text/markdown",
    python_requires=">=3.10.0",
    license="Apache-2.0",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=find_required(),
    extras_require={
        'test': find_tests_required(),
    },
    entry_points={},
    classifiers=[
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    package_data={
        'mediastack': ['version'],
    },
)
