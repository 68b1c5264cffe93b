"""Setup configuration for container-load-planner."""
from setuptools import setup, find_packages

setup(
    name="container-load-planner",
    version="0.1.0",
    description="Placement validation and layer numbering for container load planning",
    author="",
    author_email="",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.10.0",
        "pyyaml>=6.0.0",
        "numpy>=2.2.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-cov>=6.0.0",
        ],
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=6.0.0",
            "ruff>=0.15.0",
            "mypy>=1.19.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
