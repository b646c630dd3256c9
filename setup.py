from setuptools import find_packages, setup

setup(
    name="dissect.apm",
    version="1.0.0",
    description="A Dissect module implementing a parser and writer for the Apple Partition Map",
    packages=list(map(lambda v: "dissect." + v, find_packages("dissect"))),
    python_requires=">=3.9",
    install_requires=[
        "dissect.cstruct>=4,<5",
        "dissect.util>=3,<4",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
