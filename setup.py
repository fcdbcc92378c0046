# setup.py
from setuptools import setup, find_packages

setup(
    name="site_intel",
    version="0.1.0",
    description="Business website crawler and content extractor SiteIntel",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"site_intel.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "Jinja2>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["site-intel=site_intel.cli:cli"],
    },
    python_requires=">=3.11",
)
