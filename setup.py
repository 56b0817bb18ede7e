from setuptools import setup, find_packages

setup(
    name="htmltables",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=4.9.0",
        "openpyxl>=3.1.0",
        "pandas>=2.1.0",
        "click>=8.1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    entry_points={
        "console_scripts": [
            "htmltables=htmltables.cli:cli",
        ],
    },
)
