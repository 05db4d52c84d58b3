# setup.py
from setuptools import setup, find_packages

setup(
    name="cs01",
    version="0.1.0",
    description="CS01 version control system: repository discovery, config serialization and tree materialization",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'cs01=cs01.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
