from setuptools import find_packages, setup

setup(
    name="northwind-catalog",
    version="0.1.0",
    packages=find_packages(exclude=["northwind.tests", "northwind.tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "sqlalchemy>=2.0",
        "click>=8.0",
        "python-dotenv",
        "pandas"
    ],
    extras_require={"dev": ["pytest"], "test": ["pytest"]},
    entry_points={
        "console_scripts": ["northwind=northwind.cli.main:cli"],
    },
)
