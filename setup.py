from setuptools import setup, find_packages

setup(
    name="gridfour",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",  # environment wrapper in gridfour.game.rules
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "gridfour=gridfour.interfaces.cli:main",
        ],
    },
)
