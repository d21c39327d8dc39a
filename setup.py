# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="projectfiles",
    version="1.0.0",
    description="Generates strongly-typed C# accessors for files copied to the build output",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["projectfiles*"]),
    package_data={"projectfiles.core.emit": ["templates/*.cs"]},
    python_requires=">=3.9",
    install_requires=[
        "lxml",  # Project manifest (MSBuild XML) parsing
    ],
    extras_require={
        "tests": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'projectfiles=projectfiles.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
