#!/usr/bin/env python
"""
Setup script for pglocks
"""
import re
from pathlib import Path

from setuptools import setup, find_packages

this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

# Read version from the package without importing it
version_file = this_directory / "src" / "pglocks" / "_version.py"
version = re.search(
    r'^__version__ = "([^"]+)"', version_file.read_text(encoding="utf-8"), re.MULTILINE
).group(1)


setup(
    name="pglocks",
    version=version,
    description="PostgreSQL lock reference: lock modes, commands and conflict matrix",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Database",
    ],
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110.0",
        "pydantic>=2.6.0",
        "loguru>=0.7.2",
        "uvicorn[standard]>=0.29.0",
        "pyyaml>=6.0.0",
        "click>=8.1.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.4.0",
            "pytest-cov>=5.0.0",
            "httpx>=0.27.0",
            "mypy>=1.8.0",
            "black>=22.0.0",
            "ruff>=0.12.0",
            "types-pyyaml>=6.0.12",
        ],
    },
    entry_points={
        "console_scripts": [
            "pglocks=pglocks.cli:main",
        ],
    },
    include_package_data=True,
    package_data={
        "pglocks": [
            "**/*.yaml",
            "**/*.pyi",
        ],
    },
)
