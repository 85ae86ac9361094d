from setuptools import setup, find_packages

setup(
    name="passenger-cli",
    version="0.1.0",
    description="Command-line control of Phusion Passenger Standalone instances",
    packages=find_packages(include=["passenger_cli", "passenger_cli.*"]),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0",
        "pydantic>=2.0",
        "tomli>=2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "passenger=passenger_cli.cli:cli",
        ],
    },
)
