from setuptools import setup, find_packages


setup(
    name="siva-index",
    version="0.1",
    packages=find_packages(include=["siva", "siva.*"]),
    description="Index reconciliation for append-only, block-structured siva archives.",
    author="vercingetorx",
    install_requires=[],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "siva-index=siva.cli:main",
        ]
    },
)
