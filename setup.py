"""Build the vitalfile package."""

from setuptools import setup, find_packages

setup(
    name="vitalfile",
    version="0.1.0",
    description="Streaming decoder for VITAL physiological recording files",
    python_requires=">=3.9",
    package_dir={"": "python"},
    packages=find_packages("python"),
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["vitalfile = vitalfile.cli:main"]},
)
