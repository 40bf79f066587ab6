from setuptools import setup, find_packages

setup(
    name="mno-population-mode",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "scripts"]),
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.5.0",
        "numpy>=1.24.0",
        "scipy>=1.10.0",
        "matplotlib>=3.7.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
