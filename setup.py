"""Setup configuration for bender-config package."""

from setuptools import find_packages, setup

# Read version from __version__.py
version = {}
with open("src/python/bender_config/__version__.py") as f:
    exec(f.read(), version)

# Read README
with open("README.md", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="bender-config",
    version=version["__version__"],
    description="Configuration library and CLI for the bender renderfarm",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Bender Team",
    python_requires=">=3.9",
    package_dir={"": "src/python"},
    packages=find_packages(where="src/python"),
    install_requires=[
        "pyyaml>=6.0.1",
        "click>=8.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.12.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "bender-config=bender_config.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
    ],
)
