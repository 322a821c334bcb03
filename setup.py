from setuptools import setup, find_packages
from pathlib import Path

# Read the README file for the long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    name="bookproject",
    version="0.1.0",
    description="Keep track of the books you want to read, are reading, have read or did not finish",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["bookproject", "bookproject.*"]),
    entry_points={
        "console_scripts": [
            "bookproject=bookproject.cli:app"
        ],
    },
    install_requires=[
        "SQLAlchemy>=2.0.0",
        "typer>=0.9.0",
        "rich>=13.0.0",
        "fastapi>=0.100.0",
        "pydantic>=2.0.0",
        "uvicorn>=0.23.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "httpx>=0.24.0",  # fastapi.testclient
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "httpx>=0.24.0",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
    ],
    python_requires='>=3.9',
)
