from setuptools import setup, find_packages

setup(
    name="rename-tool",
    version="1.0.0",
    description="Bulk-rename top-level folders through an editable CSV round-trip",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "argcomplete>=3.0",
        "PyYAML>=6.0",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "rename_tool = apps.cli:main"
        ],
    },
)
