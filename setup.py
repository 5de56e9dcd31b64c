#!/usr/bin/env python
"""
bylawcheck - Building Bylaw Compliance Checker

Checks a building-project record against municipal bylaw limits resolved
from an external knowledge service, and answers free-text bylaw questions,
degrading to static defaults when the service is unavailable.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read long description from README
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text() if (this_directory / "README.md").exists() else ""

setup(
    name="bylawcheck",
    version="0.1.0",
    author="bylawcheck Team",
    description="Building bylaw compliance checks and bylaw Q&A",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: FastAPI",
    ],
    python_requires=">=3.10",
    install_requires=[
        # Models and configuration
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "pyyaml>=6.0",
        # Knowledge service
        "requests>=2.31.0",
        # API
        "fastapi>=0.104.0",
        "uvicorn>=0.24.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "httpx>=0.25.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "flake8>=6.1.0",
            "mypy>=1.5.0",
        ],
        "test": [
            "pytest>=7.4.0",
            "httpx>=0.25.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "bylawcheck-server=bylawcheck.api.server:run_server",
        ],
    },
    include_package_data=True,
    package_data={
        "bylawcheck": [
            "config/rules/*.yaml",
        ],
    },
)
