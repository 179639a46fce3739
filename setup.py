# setup.py
from setuptools import setup, find_packages

setup(
    name="keyscout",
    version="0.1.0",
    description="Finds hard-coded x-api-key pairs in the JavaScript of a web page",
    packages=find_packages(include=["keyscout", "keyscout.*"]),
    package_data={"keyscout": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "Jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "keyscout=keyscout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
