"""Package setup for zte_onu."""

from setuptools import setup, find_packages

setup(
    name="zte-onu",
    version="1.0.0",
    description="Client for the ZTE GPON ONU web administration interface",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
        "urllib3>=2.0.0",
    ],
    extras_require={
        "ui": [
            "colorlog>=6.8.0",
        ],
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "zte-onu=zte_onu.cli:main",
        ],
    },
)
