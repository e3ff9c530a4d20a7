"""
Setup configuration for the msquares package.

Version 0.1.0 - Binary and multi-color marching squares with heights,
side walls, simplification and matplotlib previews.
"""

from setuptools import find_packages, setup

setup(
    name="msquares",
    version="0.1.0",
    packages=find_packages(include=["msquares", "msquares.*"]),
    install_requires=[
        "numpy>=1.20.0",
        "matplotlib>=3.5.0",
        "pillow>=8.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    description="Table-driven marching squares tessellation into triangle meshes",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering",
        "Topic :: Multimedia :: Graphics",
    ],
    python_requires=">=3.8",
)
