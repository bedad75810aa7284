from setuptools import find_packages, setup

setup(
    name="mal-reader",
    version="0.1.0",
    description="Reader and printer for a small Lisp notation, with a read-print loop",
    python_requires=">=3.10",
    packages=find_packages(include=["mal", "mal.*"]),
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "mal=mal.cli:main",
        ],
    },
)
