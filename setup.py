# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="ghwalk",
    version="0.2.0",
    description="Walk GitHub repository trees like a local filesystem",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["ghwalk", "ghwalk.*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.28",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'ghwalk=ghwalk.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
