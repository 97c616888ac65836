import re
from pathlib import Path

from setuptools import find_packages, setup

here = Path(__file__).parent

with open(here / "README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

version = re.search(
    r'__version__\s*=\s*"([^"]+)"',
    (here / "fdenum" / "_version.py").read_text(encoding="utf-8"),
).group(1)

setup(
    name="fdenum",
    version=version,
    description="Lazy enumeration of finite-domain integer constraint problems.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"fdenum": ["schemas/*.json"]},
    python_requires=">=3.10",
    install_requires=[
        "pyyaml",
        "jsonschema",
        "pandas",
        "networkx",
    ],
    extras_require={"dev": ["pytest"]},
    entry_points={"console_scripts": ["fdenum=fdenum.cli:main"]},
)
