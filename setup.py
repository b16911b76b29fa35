# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="mapcurator",
    version="1.0.0",
    description="Browse a 3D asset catalog and curate models into map workspaces",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["mapcurator*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'mapcurator=mapcurator.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
