# setup.py

from setuptools import setup, find_packages
from pathlib import Path

# read the README as long description (Markdown)
here = Path(__file__).parent
long_description = (here / "README.md").read_text(encoding="utf-8")

setup(
    name="corepeel",
    version="0.1.0",
    description="k-core, coreness and k-truss decompositions over NetworkX graphs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "networkx>=2.5",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",      # testing
            "flake8>=4.0",      # linting
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "corepeel-cli = corepeel.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
