"""Setup script for Tally Board."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="tallyboard",
    version="0.1.0",
    author="Your Name",
    author_email="your.email@example.com",
    description="A shared daily tally board with automatic midnight rollover",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["tallyboard", "tallyboard.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
        "streamlit>=1.37.0",
        "sqlalchemy>=2.0.0",
        "click>=8.1.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",
        "loguru>=0.7.0",
        "pandas>=2.0.0",
        "openpyxl>=3.1.0",
        "tzdata>=2023.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.25.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tallyboard=tallyboard.cli:cli",
        ],
    },
)
