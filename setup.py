"""Setup script for the pund_analysis package."""

from setuptools import setup, find_packages

setup(
    name="pund-analysis",
    version="1.0.0",
    description="Ferroelectric PUND switching-charge analysis for parameter-analyzer exports",
    packages=find_packages(include=["pund_analysis", "pund_analysis.*"]),
    python_requires=">=3.8",
    install_requires=[
        "matplotlib>=3.3.0",
        "numpy>=1.19.0",
        "pandas>=1.2.0",
        "scipy>=1.5.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pund-analysis=pund_analysis.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Physics",
    ],
)
