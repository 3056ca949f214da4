from setuptools import setup, find_packages


setup(
    name="rollcrc",
    version="0.1",
    packages=find_packages(include=["rollcrc", "rollcrc.*"]),
    description="Reflected CRC-32 tables with O(1) rolling window checksums.",
    author="vercingetorx",
    install_requires=[],
    entry_points={
        "console_scripts": [
            "rollcrc=rollcrc.cli:main",
        ]
    },
)
