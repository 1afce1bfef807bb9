from setuptools import setup, find_packages

setup(
    name="commute-simulator",
    version="0.1.0",
    description="Agent-based commuting mode choice under social influence and weather",
    author="adamfilli",
    packages=find_packages(include=["commutesim", "commutesim.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
