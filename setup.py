from setuptools import setup, find_packages

setup(
    name="rssbuilder",
    version="1.0.0",
    description="Build well-formed RSS 2.0 feeds from in-memory entries",
    author="rssbuilder contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "feedparser>=6.0.0",
        "python-dateutil>=2.8.0",
        "rich>=13.0.0",
        "pyyaml>=6.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "rssbuilder=rssbuilder.cli:main",
        ],
    },
    python_requires=">=3.9",
)
