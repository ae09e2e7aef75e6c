"""
Marketplace Exports - CSV, JSON and PDF report exports for marketplace dashboards
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

with open("requirements-dev.txt", "r", encoding="utf-8") as fh:
    test_requirements = [line.strip() for line in fh if line.strip() and not line.startswith(("#", "-r"))]

setup(
    name="marketplace-exports",
    version="0.1.0",
    author="Anthrasite",
    author_email="team@anthrasite.com",
    description="Report and data export engine for marketplace dashboards",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["core", "report_exports", "report_exports.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "test": test_requirements,
    },
    entry_points={
        "console_scripts": [
            "report-export=core.cli:main",
        ],
    },
)
