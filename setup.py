# setup.py
from setuptools import find_packages, setup

setup(
    name="rna_assembly",
    version="1.0.0",
    packages=find_packages(include=["rna_assembly", "rna_assembly.*"]),
    package_data={"rna_assembly.conf": ["*.yaml"]},
    install_requires=[
        "numpy>=1.21.0",
        "pandas>=1.3.0",
        "biopython>=1.81",
        "tqdm>=4.65.0",
        "hydra-core>=1.3.0",
        "omegaconf>=2.3.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=22.0.0",
            "isort>=5.0.0",
            "flake8>=4.0.0",
            "hypothesis>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "rna-assembly=rna_assembly.main:main",
        ],
    },
    python_requires=">=3.8",
)
