from setuptools import find_packages, setup

setup(
    name="bookstore-inventory",
    version="0.1.0",
    packages=find_packages(exclude=["inventory.tests"]),
    install_requires=[
        "sqlalchemy>=2.0",
        "click>=8.0",
        "python-dotenv",
        "pandas"
    ],
    extras_require={"dev": ["pytest"]},
    entry_points={
        "console_scripts": [
            "inventory=inventory.cli.main:cli"
        ]
    },
)
