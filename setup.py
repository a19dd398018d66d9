# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="reviewgraph",
    version="1.0.0",
    description="Review dependency graph for the files changed in a pull request",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["reviewgraph*"]),
    python_requires=">=3.8",
    install_requires=[
        "networkx",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'reviewgraph=reviewgraph.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
