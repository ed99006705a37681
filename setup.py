"""
Setup script for cefr-quiz.

cefr-quiz is the adaptive assessment engine of a language-learning
platform. It serves three roles:

1. Question Bank - Leveled (A1-C2) sampling and bank maintenance
2. Attempt Scoring - Verifies and scores submitted answers
3. Level Estimation - Recommends a CEFR level from a scored attempt

The 'cefr-quiz' command is the CLI entry point; the REST API runs
via uvicorn (see main.py).
"""

from setuptools import find_packages, setup

setup(
    name="cefr-quiz",
    version="0.1.0",
    description="Adaptive CEFR quiz assessment engine",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config"],
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # API
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
        # Database
        "sqlalchemy>=2.0.0",
        "psycopg2-binary>=2.9.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "httpx>=0.25.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "cefr-quiz=cefr_quiz.cli.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="cefr language-learning assessment quiz adaptive",
)
